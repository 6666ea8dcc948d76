"""Entity: GiftProduct."""

from typing import Any

from pydantic import AliasChoices, Field, field_validator, model_validator

from src.oilpress_admin.entities.catalog.priced import Priced
from src.oilpress_admin.entities.catalog.product import (
    ProductFaq,
    Status,
    _limit_gallery,
)
from src.oilpress_admin.entities.core._base import Entity

_NAME_KEYS = ("product_name", "productName", "name")


class GiftProduct(Entity, Priced):
    """A gift box with its contents and an image gallery.

    Gifts saved by the old dashboard form kept their name under ``category``
    and their price under ``mrp``; both are read back transparently.
    """

    product_name: str = Field(
        min_length=1, validation_alias=AliasChoices(*_NAME_KEYS)
    )
    category: str = ""
    contents: str = ""
    description: str = ""
    image: str = ""
    other_images: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("other_images", "otherImages")
    )
    product_faqs: list[ProductFaq] = Field(
        default_factory=list, validation_alias=AliasChoices("product_faqs", "productFaqs")
    )
    status: Status = "Active"

    @model_validator(mode="before")
    @classmethod
    def _name_from_category(cls, data: Any) -> Any:
        if not isinstance(data, dict) or any(data.get(k) for k in _NAME_KEYS):
            return data
        if data.get("category"):
            return {**data, "product_name": data["category"]}
        return data

    @field_validator("other_images")
    @classmethod
    def _check_gallery(cls, value: list[str]) -> list[str]:
        return _limit_gallery(value)
