"""Unit tests for selling-price and discount derivation."""

import pytest

from src.oilpress_admin.core.pricing import (
    PricingError,
    discount_percent,
    round_half_up,
    selling_price,
)


class TestSellingPrice:
    """Test cases for selling_price."""

    def test_applies_discount(self):
        assert selling_price(140, 15) == 119

    def test_rounds_half_up(self):
        """A price ending in exactly .5 rounds up, not to the nearest even."""
        # 125 - 125 * 10 / 100 = 112.5
        assert selling_price(125, 10) == 113
        # 105 - 105 * 50 / 100 = 52.5
        assert selling_price(105, 50) == 53

    @pytest.mark.parametrize("actual,discount", [(0, 10), (-5, 10), (140, 0), (140, -3)])
    def test_non_positive_inputs_return_actual(self, actual, discount):
        assert selling_price(actual, discount) == actual

    def test_full_discount_is_free(self):
        assert selling_price(250, 100) == 0

    def test_discount_above_hundred_is_rejected(self):
        with pytest.raises(PricingError, match="cannot exceed 100"):
            selling_price(100, 101)

    def test_pricing_error_is_value_error(self):
        assert issubclass(PricingError, ValueError)


class TestDiscountPercent:
    """Test cases for discount_percent."""

    def test_derives_whole_percent(self):
        assert discount_percent(180, 165) == 8

    def test_zero_actual_gives_zero(self):
        assert discount_percent(0, 50) == 0

    def test_rounds_half_up(self):
        # (200 - 199) / 200 * 100 = 0.5
        assert discount_percent(200, 199) == 1

    def test_selling_above_actual_is_negative(self):
        assert discount_percent(100, 110) == -10


class TestRoundTrip:
    """Discount derived back from a computed selling price stays within one point."""

    def test_round_trip_error_bounded(self):
        # Whole-unit rounding of the price can shift the percent by 50/actual,
        # so the one-point bound needs prices of at least 100
        for actual in (100, 140, 333, 999, 12345):
            for discount in range(0, 101):
                selling = selling_price(actual, discount)
                derived = discount_percent(actual, selling)
                assert abs(derived - discount) <= 1, (actual, discount, selling, derived)

    def test_round_half_up_helper(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.49) == 2
