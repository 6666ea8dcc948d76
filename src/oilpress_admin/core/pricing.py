"""Selling-price and discount derivation shared by every priced entity.

Both directions round half-up to the nearest whole currency unit so that a
price shown in a list and the price stored by a form always agree.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

MAX_DISCOUNT = 100


class PricingError(ValueError):
    """Raised when a price or discount is outside the accepted range."""


def round_half_up(value: float | Decimal) -> int:
    """Round to the nearest integer, with ``x.5`` rounding away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def selling_price(actual: float, discount: float) -> float:
    """Return the selling price for ``actual`` after ``discount`` percent off.

    A non-positive actual price or discount leaves the price unchanged.

    Raises:
        PricingError: If ``discount`` is above 100 percent.
    """
    if discount > MAX_DISCOUNT:
        raise PricingError(f"Discount cannot exceed {MAX_DISCOUNT}%, got {discount}")
    if actual <= 0 or discount <= 0:
        return actual

    a = Decimal(str(actual))
    d = Decimal(str(discount))
    return round_half_up(a - a * d / 100)


def discount_percent(actual: float, selling: float) -> int:
    """Derive the whole-number discount percent that turns ``actual`` into ``selling``."""
    if actual <= 0:
        return 0

    a = Decimal(str(actual))
    s = Decimal(str(selling))
    return round_half_up((a - s) / a * 100)
