"""Entity: Review."""

from pydantic import AliasChoices, Field

from src.oilpress_admin.entities.inbox._base import InboxEntity


class Review(InboxEntity):
    """A product review awaiting or past moderation."""

    name: str = ""
    email: str = ""
    description: str = ""
    rating: int = Field(default=0, ge=0, le=5)
    product_id: str = Field(
        default="", validation_alias=AliasChoices("product_id", "productId")
    )
    approved: bool = False
