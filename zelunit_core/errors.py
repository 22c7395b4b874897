"""
Exceptions raised by ZEL unit conversions.

All of them derive from ``ValueError`` so callers that only care about
"bad input" can catch that.
"""

from __future__ import annotations


class UnitError(ValueError):
    """Base class for every unit conversion error."""


class UnknownCode(UnitError):
    """The denomination code is not one of the recognised ones."""

    def __init__(self, code):
        self.code = code
        super().__init__(f"Unrecognized unit code: {code!r}")


class InvalidRate(UnitError):
    """The fiat exchange rate is not a strictly positive number."""

    def __init__(self, rate):
        self.rate = rate
        super().__init__(f"Invalid exchange rate: {rate!r}")


class InvalidAmount(UnitError):
    """The amount is not a finite number or numeric string."""

    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Invalid amount: {amount!r}")


class InvalidUnitData(UnitError):
    """Serialized unit data could not be decoded."""
