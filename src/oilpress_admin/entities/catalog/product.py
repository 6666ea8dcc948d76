"""Entities: Product and the parts embedded in it."""

from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from src.oilpress_admin.entities.catalog.priced import Priced
from src.oilpress_admin.entities.core._base import Entity

MAX_GALLERY_IMAGES = 5

Status = Literal["Active", "Inactive"]


class ProductVariant(Priced):
    """A purchasable size of a product with its own pricing."""

    size: str = Field(min_length=1)


class ProductFaq(BaseModel):
    question: str
    answer: str


def _limit_gallery(images: list[str]) -> list[str]:
    images = [url for url in images if url]
    if len(images) > MAX_GALLERY_IMAGES:
        raise ValueError(f"At most {MAX_GALLERY_IMAGES} additional images are allowed")
    return images


class Product(Entity, Priced):
    """A single oil product in the catalogue.

    Name, category and size are required and the selling price must be
    positive once derived.
    """

    product_name: str = Field(
        min_length=1, validation_alias=AliasChoices("product_name", "productName")
    )
    category: str = Field(min_length=1)
    size: str = Field(min_length=1)
    short_description: str = Field(
        default="", validation_alias=AliasChoices("short_description", "shortDescription")
    )
    rating: str = ""
    long_description: str = Field(
        default="", validation_alias=AliasChoices("long_description", "longDescription")
    )
    main_image: str = Field(
        default="", validation_alias=AliasChoices("main_image", "mainImage", "image")
    )
    other_images: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("other_images", "otherImages")
    )
    ingredients: str = ""
    benefits: str = ""
    storage_info: str = Field(
        default="", validation_alias=AliasChoices("storage_info", "storageInfo")
    )
    product_variants: list[ProductVariant] = Field(
        default_factory=list,
        validation_alias=AliasChoices("product_variants", "productVariants"),
    )
    product_faqs: list[ProductFaq] = Field(
        default_factory=list, validation_alias=AliasChoices("product_faqs", "productFaqs")
    )
    status: Status = "Active"

    @field_validator("other_images")
    @classmethod
    def _check_gallery(cls, value: list[str]) -> list[str]:
        return _limit_gallery(value)

    @model_validator(mode="after")
    def _require_positive_price(self):
        if not self.selling_mrp or self.selling_mrp <= 0:
            raise ValueError("Selling price must be greater than zero")
        return self


class ComboProduct(Product):
    """A bundle of products sold together."""

    included_product_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("included_product_ids", "includedProductIds"),
    )
