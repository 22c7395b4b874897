"""
Precision constants and helpers for ZEL amounts.

ZEL uses 8 decimal places, matching Bitcoin's satoshi model:

    1 ZEL = 100,000,000 satoshis (smallest indivisible unit)

All arithmetic goes through ``Decimal`` so that binary floating-point
representation error never leaks into the satoshi count.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, DecimalException, InvalidOperation, localcontext

from zelunit_core.errors import InvalidAmount

# Number of decimal places for ZEL amounts.
ZEL_DECIMALS: int = 8

# Smallest representable unit — 1 satoshi = 0.00000001 ZEL.
SATOSHIS_PER_ZEL: int = 10 ** ZEL_DECIMALS  # 100_000_000

ONE_SATOSHI = Decimal("0.00000001")

# Fiat amounts are shown in cents.
FIAT_DECIMALS: int = 2


def to_decimal(value) -> Decimal:
    """Turn a number or numeric string into an exact ``Decimal``.

    Floats go through ``repr`` so the shortest round-tripping literal is
    used (``0.00000003`` stays ``0.00000003`` instead of
    ``2.99999999999999980...e-8``).

    >>> to_decimal(1.3)
    Decimal('1.3')
    >>> to_decimal("8999")
    Decimal('8999')
    """
    if isinstance(value, bool):
        raise InvalidAmount(value)
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidAmount(value)
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as exc:
            raise InvalidAmount(value) from exc
    else:
        raise InvalidAmount(value)
    if not result.is_finite():
        raise InvalidAmount(value)
    return result


def working_precision(*values: Decimal) -> int:
    """Context precision that carries *values* through a satoshi conversion.

    Enough digits for every coefficient digit and every power of ten the
    exponents add, plus room for the satoshi scaling, and never less than
    the default 28.
    """
    needed = 0
    for value in values:
        _, digits, exponent = value.as_tuple()
        needed += len(digits) + abs(exponent)
    return max(28, needed + 2 * ZEL_DECIMALS)


def round_to_satoshi(zel: Decimal) -> int:
    """Round a ZEL ``Decimal`` to the nearest whole satoshi.

    Rounding is done in ROUND_HALF_UP mode (half a satoshi rounds away
    from zero).  Amounts of any size are handled; only values the
    ``decimal`` module itself cannot represent raise ``InvalidAmount``.
    """
    try:
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, working_precision(zel))
            return int((zel * SATOSHIS_PER_ZEL).quantize(Decimal(1), ROUND_HALF_UP))
    except DecimalException as exc:
        raise InvalidAmount(zel) from exc


def zel_to_satoshis(zel) -> int:
    """Convert a ZEL amount to the nearest integer satoshi count."""
    return round_to_satoshi(to_decimal(zel))


def satoshis_to_zel(satoshis: int) -> Decimal:
    """Convert an integer satoshi count to an exact ZEL ``Decimal``."""
    return Decimal(f"{int(satoshis)}E-{ZEL_DECIMALS}")


def round_fiat(value: Decimal, decimals: int = FIAT_DECIMALS) -> Decimal:
    """Round a fiat ``Decimal`` to *decimals* places, half up."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + decimals + 2)
        return value.quantize(Decimal(1).scaleb(-decimals), ROUND_HALF_UP)


def as_number(value: Decimal) -> int | float:
    """Plain Python number for a ``Decimal``: ``int`` if integral, else ``float``."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def format_amount(value, code: str = "ZEL", decimals: int = ZEL_DECIMALS) -> str:
    """Return a human-readable string with a fixed number of decimals."""
    return f"{to_decimal(value):.{decimals}f} {code}"
