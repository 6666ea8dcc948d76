"""Entity: Blog."""

from pydantic import AliasChoices, Field, field_validator

from src.oilpress_admin.entities.content._base import ContentEntity


class Blog(ContentEntity):
    title: str = Field(min_length=1)
    image: str = ""
    description: str = ""
    date: str = ""
    category: str = ""
    author: str = ""
    read_time: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("read_time", "readTime")
    )
    tags: list[str] = Field(default_factory=list)
    detail: str = ""

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value):
        # Forms send tags as one comma separated string
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        return value
