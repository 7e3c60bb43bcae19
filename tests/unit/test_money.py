"""Tests for qm_common.money — integer cents / basis-point arithmetic."""

from decimal import Decimal

import pytest

from src.qm_common.money import (
    apply_bps,
    cents_to_display,
    dollars_to_cents,
    fraction_to_bps,
    validate_bps,
)


class TestValidateBps:
    def test_bounds_ok(self) -> None:
        for bps in [0, 2500, 10000]:
            validate_bps(bps)  # Should not raise

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError, match=r"0 and 10000"):
            validate_bps(-1)

    def test_above_one_raises(self) -> None:
        with pytest.raises(ValueError, match=r"0 and 10000"):
            validate_bps(10001)


class TestApplyBps:
    def test_viewing_fee_drop_share(self) -> None:
        # $5 x 0.80 = $4.00
        assert apply_bps(500, 8000) == 400

    def test_platform_share(self) -> None:
        # $5 x 0.20 = $1.00
        assert apply_bps(500, 2000) == 100

    def test_split_of_platform(self) -> None:
        assert apply_bps(100, 2500) == 25
        assert apply_bps(100, 7500) == 75

    def test_half_cent_rounds_up(self) -> None:
        # 1 cent x 0.5 = 0.5 → 1
        assert apply_bps(1, 5000) == 1

    def test_below_half_rounds_down(self) -> None:
        # 1 cent x 0.4999 = 0.4999 → 0
        assert apply_bps(1, 4999) == 0

    def test_zero(self) -> None:
        assert apply_bps(0, 8000) == 0
        assert apply_bps(500, 0) == 0

    def test_full_share_is_identity(self) -> None:
        assert apply_bps(12345, 10000) == 12345

    def test_negative_amount_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            apply_bps(-1, 5000)


class TestCentsToDisplay:
    def test_basic(self) -> None:
        assert cents_to_display(109600) == "$1,096.00"

    def test_cents(self) -> None:
        assert cents_to_display(109625) == "$1,096.25"

    def test_zero(self) -> None:
        assert cents_to_display(0) == "$0.00"

    def test_negative(self) -> None:
        assert cents_to_display(-1200) == "-$12.00"


class TestDollarsToCents:
    def test_whole_dollars(self) -> None:
        assert dollars_to_cents("1100") == 110000

    def test_int(self) -> None:
        assert dollars_to_cents(5) == 500

    def test_decimal(self) -> None:
        assert dollars_to_cents(Decimal("4.99")) == 499

    def test_sub_cent_rounds_half_up(self) -> None:
        assert dollars_to_cents("0.005") == 1
        assert dollars_to_cents("0.004") == 0

    def test_garbage_raises(self) -> None:
        with pytest.raises(ValueError, match="dollar amount"):
            dollars_to_cents("five")


class TestFractionToBps:
    def test_basic(self) -> None:
        assert fraction_to_bps("0.8") == 8000
        assert fraction_to_bps("0.25") == 2500

    def test_one(self) -> None:
        assert fraction_to_bps(1) == 10000

    def test_out_of_range_raises(self) -> None:
        with pytest.raises(ValueError):
            fraction_to_bps("1.5")

    def test_garbage_raises(self) -> None:
        with pytest.raises(ValueError, match="fraction"):
            fraction_to_bps("most")


class TestNonFiniteInput:
    @pytest.mark.parametrize("value", ["Infinity", "-Infinity", "NaN", "sNaN"])
    def test_dollars_rejected(self, value) -> None:
        with pytest.raises(ValueError, match="dollar amount"):
            dollars_to_cents(value)

    @pytest.mark.parametrize("value", ["Infinity", "NaN"])
    def test_fraction_rejected(self, value) -> None:
        with pytest.raises(ValueError, match="fraction"):
            fraction_to_bps(value)

    def test_amount_too_large_to_quantize(self) -> None:
        with pytest.raises(ValueError, match="dollar amount"):
            dollars_to_cents("1e999999")
