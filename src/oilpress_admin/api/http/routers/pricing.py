"""Pricing preview endpoints used by the product forms."""

from fastapi import APIRouter, HTTPException, Query

from src.oilpress_admin.core.pricing import PricingError, discount_percent, selling_price

router = APIRouter()


@router.get("/preview")
def preview_selling_price(
    actual_mrp: float = Query(..., ge=0),
    discount: float = Query(default=0),
) -> dict[str, float]:
    """Selling price for an actual price and discount percent."""
    try:
        selling = selling_price(actual_mrp, discount)
    except PricingError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return {"actual_mrp": actual_mrp, "discount": discount, "selling_mrp": selling}


@router.get("/discount")
def derive_discount(
    actual_mrp: float = Query(..., ge=0),
    selling_mrp: float = Query(..., ge=0),
) -> dict[str, float]:
    """Whole-number discount percent between an actual and a selling price."""
    return {
        "actual_mrp": actual_mrp,
        "selling_mrp": selling_mrp,
        "discount": discount_percent(actual_mrp, selling_mrp),
    }
