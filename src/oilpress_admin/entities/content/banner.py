"""Entity: Banner."""

from pydantic import AliasChoices, Field

from src.oilpress_admin.entities.content._base import ContentEntity


class Banner(ContentEntity):
    image_url: str = Field(
        min_length=1, validation_alias=AliasChoices("image_url", "imageUrl")
    )
    title: str | None = None
    description: str | None = None
