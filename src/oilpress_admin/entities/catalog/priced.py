"""Pricing fields shared by products, combos, gifts and variants."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field, computed_field, model_validator

from src.oilpress_admin.core.pricing import discount_percent, selling_price


class Priced(BaseModel):
    """Actual price, discount percent and the selling price derived from them.

    ``selling_mrp`` is recomputed whenever a discount is stored. Records
    saved before discounts existed only carry a selling price; that price is
    kept as stored and ``effective_discount`` reports the percent it implies.
    """

    actual_mrp: float = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("actual_mrp", "actualMRP", "mrp"),
    )
    discount: float | None = Field(default=None, ge=0, le=100)
    selling_mrp: float | None = Field(
        default=None,
        validation_alias=AliasChoices("selling_mrp", "sellingMRP"),
    )

    @model_validator(mode="after")
    def _derive_pricing(self):
        if self.discount is not None:
            self.selling_mrp = selling_price(self.actual_mrp, self.discount)
            return self

        if self.selling_mrp is None:
            self.selling_mrp = self.actual_mrp
        elif self.actual_mrp <= 0:
            if self.selling_mrp != self.actual_mrp:
                raise ValueError("Selling price must equal the actual price when it is zero")
        elif not 0 <= self.selling_mrp <= self.actual_mrp:
            raise ValueError("Selling price must be between zero and the actual price")
        return self

    @computed_field
    @property
    def effective_discount(self) -> float:
        """Stored discount, or the one implied by the selling price."""
        if self.discount is not None:
            return self.discount
        return discount_percent(self.actual_mrp, self.selling_mrp)
