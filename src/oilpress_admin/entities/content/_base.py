from pydantic import AliasChoices, Field

from src.oilpress_admin.entities.core._base import Entity


class ContentEntity(Entity):
    """Content shown on the storefront that can be hidden without deleting it."""

    is_active: bool = Field(
        default=True, validation_alias=AliasChoices("is_active", "isActive")
    )
