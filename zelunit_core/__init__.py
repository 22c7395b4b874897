"""
ZelUnit - ZEL amount denominations and fiat conversion.

Key features:
- Immutable ``Unit`` value object stored as an integer satoshi count
- Conversion between ZEL, mZEL, bits (uZEL) and satoshis
- Fiat conversion at a caller-supplied exchange rate
- Lossless JSON round-trips of the original amount and code
"""

from zelunit_core.errors import (
    InvalidAmount,
    InvalidRate,
    InvalidUnitData,
    UnitError,
    UnknownCode,
)
from zelunit_core.unit import Denomination, FiatRate, Unit, resolve_code

__version__ = "1.0.0"
__all__ = [
    "Unit",
    "Denomination",
    "FiatRate",
    "resolve_code",
    "UnitError",
    "UnknownCode",
    "InvalidRate",
    "InvalidAmount",
    "InvalidUnitData",
]
