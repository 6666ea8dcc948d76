"""Entities: the best-seller slots and the product of the day.

Both are stored as fixed-id documents in the ``highlights`` collection and
point at items of the product, combo or gift collections.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from src.oilpress_admin.entities import collections
from src.oilpress_admin.entities.core._base import Entity

BEST_SELLERS_ID = "bestSellers"
PRODUCT_OF_THE_DAY_ID = "productOfTheDay"
BEST_SELLER_SLOTS = 4

SourceCollection = Literal["products", "comboProducts", "giftProducts"]


class ItemReference(BaseModel):
    """Pointer to a catalogue item, with its name kept for display."""

    item_id: str = Field(min_length=1)
    source_collection: SourceCollection = collections.PRODUCTS
    name: str = ""


class BestSellers(Entity):
    id: str = BEST_SELLERS_ID
    slots: list[ItemReference | None] = Field(
        default_factory=lambda: [None] * BEST_SELLER_SLOTS
    )

    @field_validator("slots")
    @classmethod
    def _fixed_slot_count(cls, value: list[ItemReference | None]) -> list[ItemReference | None]:
        if len(value) > BEST_SELLER_SLOTS:
            raise ValueError(f"At most {BEST_SELLER_SLOTS} best sellers can be selected")
        return value + [None] * (BEST_SELLER_SLOTS - len(value))

    def references(self) -> list[ItemReference]:
        return [slot for slot in self.slots if slot is not None]


class ProductOfTheDay(Entity):
    id: str = PRODUCT_OF_THE_DAY_ID
    item: ItemReference
