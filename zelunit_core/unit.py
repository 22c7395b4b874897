"""
ZEL amount value object.

A ``Unit`` holds an amount of ZEL expressed in one of four denominations
(or as a fiat amount at a given exchange rate) and converts it to any of
the others:

    ZEL       1
    mZEL      0.001         (milli)
    bits      0.000001      (micro, also exposed as uZEL)
    satoshis  0.00000001    (smallest indivisible unit)

Internally every amount is normalised to an integer satoshi count, so
conversions never accumulate floating-point dust.

Usage:
    from zelunit_core.unit import Unit
    u = Unit.from_zel("1.3")
    u.satoshis          # 130000000
    u.at_rate(350)      # 455.0
    u.to_json()         # '{"amount":1.3,"code":"ZEL"}'
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, DecimalException, localcontext
from enum import Enum
from typing import Union

from zelunit_core.errors import InvalidAmount, InvalidRate, InvalidUnitData, UnknownCode
from zelunit_core.precision import (
    FIAT_DECIMALS,
    SATOSHIS_PER_ZEL,
    as_number,
    round_fiat,
    round_to_satoshi,
    satoshis_to_zel,
    to_decimal,
    working_precision,
)

logger = logging.getLogger("zelunit_unit")


class Denomination(str, Enum):
    """Recognised denomination codes."""
    ZEL = "ZEL"
    mZEL = "mZEL"
    bits = "bits"
    satoshis = "satoshis"

    @classmethod
    def parse(cls, code: str) -> Denomination:
        try:
            return cls(code)
        except ValueError as exc:
            logger.debug(f"Rejected unit code {code!r}")
            raise UnknownCode(code) from exc

    @property
    def satoshis_per_unit(self) -> int:
        return _SATOSHIS_PER_UNIT[self]

    @property
    def decimals(self) -> int:
        """Decimal places below which an amount in this unit is dust."""
        return _DECIMALS[self]

    def to_zel(self, amount: Decimal) -> Decimal:
        return amount * self.satoshis_per_unit / SATOSHIS_PER_ZEL


_SATOSHIS_PER_UNIT = {
    Denomination.ZEL: SATOSHIS_PER_ZEL,
    Denomination.mZEL: 100_000,
    Denomination.bits: 100,
    Denomination.satoshis: 1,
}

_DECIMALS = {
    Denomination.ZEL: 8,
    Denomination.mZEL: 5,
    Denomination.bits: 2,
    Denomination.satoshis: 0,
}


@dataclass(frozen=True)
class FiatRate:
    """An exchange rate in fiat units per one ZEL.  Must be > 0."""
    rate: Union[int, float, Decimal]

    def __post_init__(self):
        if isinstance(self.rate, bool) or not isinstance(self.rate, (int, float, Decimal)):
            raise InvalidRate(self.rate)
        try:
            value = to_decimal(self.rate)
        except InvalidAmount as exc:
            raise InvalidRate(self.rate) from exc
        if value <= 0:
            logger.debug(f"Rejected exchange rate {self.rate!r}")
            raise InvalidRate(self.rate)

    @property
    def decimal(self) -> Decimal:
        return to_decimal(self.rate)

    def to_zel(self, amount: Decimal) -> Decimal:
        return amount / self.decimal


Code = Union[Denomination, FiatRate]


def resolve_code(code) -> Code:
    """Map a loose ``str | number`` code onto a ``Denomination`` or ``FiatRate``."""
    if isinstance(code, (Denomination, FiatRate)):
        return code
    if isinstance(code, str):
        return Denomination.parse(code)
    if isinstance(code, bool):
        raise UnknownCode(code)
    if isinstance(code, (int, float, Decimal)):
        return FiatRate(code)
    raise UnknownCode(code)


def _code_value(code: Code):
    if isinstance(code, FiatRate):
        return _plain_amount(code.rate, code.decimal)
    return code.value


@dataclass(frozen=True, order=True)
class Unit:
    """
    An immutable amount of ZEL.

    ``code`` is a denomination code (``"ZEL"``, ``"mZEL"``, ``"bits"``,
    ``"satoshis"``) or a positive number, read as an exchange rate in fiat
    units per ZEL (so ``Unit(43, 350)`` is 43 fiat at 350/ZEL).

    Two units compare (==, <, hash) by the number of satoshis they hold,
    whatever denomination they were created in.

    The code strings themselves live on ``Denomination`` (``Denomination.ZEL
    == "ZEL"``); on ``Unit`` those names are the per-instance accessors.
    """
    amount: Union[int, float] = field(compare=False)
    code: Code = field(compare=False)
    _satoshis: int = field(init=False)

    def __post_init__(self):
        code = resolve_code(self.code)
        value = to_decimal(self.amount)
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "amount", _plain_amount(self.amount, value))
        operands = (value, code.decimal) if isinstance(code, FiatRate) else (value,)
        try:
            with localcontext() as ctx:
                ctx.prec = working_precision(*operands)
                satoshis = round_to_satoshi(code.to_zel(value))
        except DecimalException as exc:
            raise InvalidAmount(self.amount) from exc
        object.__setattr__(self, "_satoshis", satoshis)

    # ── Factories ────────────────────────────────────────────────

    @classmethod
    def from_zel(cls, amount) -> Unit:
        return cls(amount, Denomination.ZEL)

    @classmethod
    def from_millis(cls, amount) -> Unit:
        return cls(amount, Denomination.mZEL)

    from_milis = from_millis

    @classmethod
    def from_bits(cls, amount) -> Unit:
        return cls(amount, Denomination.bits)

    @classmethod
    def from_satoshis(cls, amount) -> Unit:
        return cls(amount, Denomination.satoshis)

    @classmethod
    def from_fiat(cls, amount, rate) -> Unit:
        return cls(amount, FiatRate(rate))

    # ── Accessors ────────────────────────────────────────────────

    @property
    def ZEL(self) -> float:
        return self._in(Denomination.ZEL)

    @property
    def mZEL(self) -> float:
        return self._in(Denomination.mZEL)

    @property
    def uZEL(self) -> float:
        return self._in(Denomination.bits)

    @property
    def bits(self) -> float:
        return self._in(Denomination.bits)

    @property
    def satoshis(self) -> int:
        return self._satoshis

    def _in(self, denomination: Denomination):
        if denomination is Denomination.satoshis:
            return self._satoshis
        return float(self._decimal_in(denomination))

    def _decimal_in(self, denomination: Denomination) -> Decimal:
        satoshis = Decimal(self._satoshis)
        with localcontext() as ctx:
            ctx.prec = working_precision(satoshis)
            return satoshis / denomination.satoshis_per_unit

    def _fiat(self, rate: FiatRate, decimals: int | None) -> Decimal:
        if decimals is None:
            decimals = FIAT_DECIMALS
        zel = satoshis_to_zel(self._satoshis)
        with localcontext() as ctx:
            ctx.prec = working_precision(zel, rate.decimal)
            return round_fiat(zel * rate.decimal, decimals)

    # ── Conversions ──────────────────────────────────────────────

    def to(self, code, decimals: int | None = None):
        """
        Convert to a denomination code or, given a positive number, to fiat
        at that rate (rounded to ``decimals`` places, default 2).
        """
        target = resolve_code(code)
        if isinstance(target, FiatRate):
            return float(self._fiat(target, decimals))
        return self._in(target)

    def at_rate(self, rate, decimals: int | None = None) -> float:
        """Fiat value of this amount at ``rate`` fiat units per ZEL."""
        return float(self._fiat(FiatRate(rate), decimals))

    def to_zel(self) -> float:
        return self.ZEL

    def to_millis(self) -> float:
        return self.mZEL

    to_milis = to_millis

    def to_bits(self) -> float:
        return self.bits

    def to_satoshis(self) -> int:
        return self.satoshis

    # ── Serialization ────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {"amount": self.amount, "code": _code_value(self.code)}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: Mapping) -> Unit:
        if not isinstance(data, Mapping):
            raise InvalidUnitData(f"Expected an object, got {type(data).__name__}")
        try:
            amount, code = data["amount"], data["code"]
        except KeyError as exc:
            raise InvalidUnitData(f"Missing field {exc.args[0]!r}") from exc
        return cls(amount, code)

    @classmethod
    def from_json(cls, text) -> Unit:
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as exc:
            logger.debug(f"Rejected unit JSON: {exc}")
            raise InvalidUnitData("Invalid JSON for unit") from exc
        return cls.from_dict(data)

    # ── Display ──────────────────────────────────────────────────

    def to_string(self, code=None) -> str:
        """Amount followed by its code, e.g. ``"1.3 ZEL"`` or ``"1.30 @ 350/ZEL"``."""
        target = self.code if code is None else resolve_code(code)
        if isinstance(target, FiatRate):
            return f"{self._fiat(target, None)} @ {target.rate}/ZEL"
        return f"{self._decimal_in(target):f} {target.value}"

    def inspect(self) -> str:
        return f"<Unit: {self._satoshis} satoshis>"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return self.inspect()


def _plain_amount(raw, value: Decimal) -> Union[int, float]:
    """JSON-friendly amount: ints and floats as given, anything else normalised."""
    if isinstance(raw, (int, float)):
        return raw
    return as_number(value)
