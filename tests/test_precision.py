"""
Tests for 8 decimal place precision of ZEL amounts.

    1 ZEL = 100,000,000 satoshis

Covers precision constants, Decimal coercion, satoshi rounding,
satoshi ↔ ZEL conversions, fiat rounding and display formatting.
"""

from decimal import Decimal

import pytest

from zelunit_core.errors import InvalidAmount
from zelunit_core.precision import (
    FIAT_DECIMALS,
    ONE_SATOSHI,
    SATOSHIS_PER_ZEL,
    ZEL_DECIMALS,
    as_number,
    format_amount,
    round_fiat,
    round_to_satoshi,
    satoshis_to_zel,
    to_decimal,
    working_precision,
    zel_to_satoshis,
)


# ═══════════════════════════════════════════════════════════════════════
#  Precision constants
# ═══════════════════════════════════════════════════════════════════════


class TestPrecisionConstants:

    def test_zel_decimals(self):
        assert ZEL_DECIMALS == 8

    def test_satoshis_per_zel(self):
        assert SATOSHIS_PER_ZEL == 100_000_000

    def test_one_satoshi(self):
        assert ONE_SATOSHI * SATOSHIS_PER_ZEL == 1

    def test_fiat_decimals(self):
        assert FIAT_DECIMALS == 2


# ═══════════════════════════════════════════════════════════════════════
#  to_decimal
# ═══════════════════════════════════════════════════════════════════════


class TestToDecimal:

    def test_float_uses_shortest_repr(self):
        assert to_decimal(0.00000003) == Decimal("0.00000003")
        assert to_decimal(1.3) == Decimal("1.3")

    def test_int(self):
        assert to_decimal(8999) == Decimal(8999)

    def test_numeric_string(self):
        assert to_decimal(" 1.00001 ") == Decimal("1.00001")

    def test_decimal_passthrough(self):
        d = Decimal("0.1")
        assert to_decimal(d) is d

    @pytest.mark.parametrize("value", ["1,5", "one", "NaN", "Infinity", float("nan"), True, [1]])
    def test_rejects(self, value):
        with pytest.raises(InvalidAmount):
            to_decimal(value)


# ═══════════════════════════════════════════════════════════════════════
#  Satoshi rounding
# ═══════════════════════════════════════════════════════════════════════


class TestRoundToSatoshi:

    def test_exact(self):
        assert round_to_satoshi(Decimal("1.12345678")) == 112_345_678

    def test_half_rounds_up(self):
        assert round_to_satoshi(ONE_SATOSHI / 2) == 1

    def test_third_rounds_down(self):
        assert round_to_satoshi(ONE_SATOSHI / 3) == 0

    def test_negative_half_rounds_away_from_zero(self):
        assert round_to_satoshi(-ONE_SATOSHI / 2) == -1

    def test_returns_int(self):
        assert isinstance(round_to_satoshi(Decimal("0.5")), int)

    def test_more_digits_than_default_context(self):
        zel = Decimal("12345678901234567890123.45678901")
        assert round_to_satoshi(zel) == 1234567890123456789012345678901

    def test_unrepresentable_raises_invalid_amount(self):
        with pytest.raises(InvalidAmount):
            round_to_satoshi(Decimal("1E+999999"))

    def test_working_precision_floor(self):
        assert working_precision(Decimal("1.3")) == 28

    def test_working_precision_grows_with_operands(self):
        assert working_precision(Decimal(10**30)) == 31 + 16
        assert working_precision(Decimal("1.5"), Decimal("1E+40")) == 2 + 1 + 1 + 40 + 16


# ═══════════════════════════════════════════════════════════════════════
#  satoshis ↔ ZEL conversions
# ═══════════════════════════════════════════════════════════════════════


class TestSatoshiConversions:

    @pytest.mark.parametrize("satoshis,expected", [
        (0, Decimal("0")),
        (1, Decimal("0.00000001")),
        (100_000_000, Decimal("1")),
        (12_345_678, Decimal("0.12345678")),
    ])
    def test_satoshis_to_zel(self, satoshis, expected):
        assert satoshis_to_zel(satoshis) == expected

    @pytest.mark.parametrize("zel,expected", [
        (0.0, 0),
        (0.00000001, 1),
        (0.00000003, 3),
        (1.0, 100_000_000),
        ("0.12345678", 12_345_678),
    ])
    def test_zel_to_satoshis(self, zel, expected):
        assert zel_to_satoshis(zel) == expected

    def test_satoshis_to_zel_is_exact_for_large_counts(self):
        assert satoshis_to_zel(10**40 + 1) == Decimal("100000000000000000000000000000000.00000001")

    def test_roundtrip(self):
        assert float(satoshis_to_zel(zel_to_satoshis(42.12345678))) == 42.12345678


# ═══════════════════════════════════════════════════════════════════════
#  Fiat rounding, numbers and formatting
# ═══════════════════════════════════════════════════════════════════════


class TestFiatAndFormat:

    def test_round_fiat_default_cents(self):
        assert round_fiat(Decimal("0.123")) == Decimal("0.12")
        assert round_fiat(Decimal("0.125")) == Decimal("0.13")

    def test_round_fiat_custom(self):
        assert round_fiat(Decimal("455.00049"), 3) == Decimal("455.000")

    def test_round_fiat_large_value(self):
        value = Decimal("123456789012345678901234567890.005")
        assert round_fiat(value) == Decimal("123456789012345678901234567890.01")

    def test_as_number(self):
        assert as_number(Decimal("8999")) == 8999
        assert isinstance(as_number(Decimal("8999")), int)
        assert as_number(Decimal("1.5")) == 1.5

    def test_format_default(self):
        assert format_amount(1.5) == "1.50000000 ZEL"

    def test_format_custom_code(self):
        assert format_amount("0.0013", "mZEL", 5) == "0.00130 mZEL"

    def test_format_zero(self):
        assert format_amount(0) == "0.00000000 ZEL"
