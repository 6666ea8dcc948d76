"""Entity: SliderText."""

from pydantic import Field, field_validator

from src.oilpress_admin.entities.content._base import ContentEntity


class SliderText(ContentEntity):
    """One line of text in the storefront's scrolling announcement bar."""

    text: str = Field(min_length=1)

    @field_validator("text", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value
