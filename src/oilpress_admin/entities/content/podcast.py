"""Entity: Podcast."""

from pydantic import AliasChoices, Field

from src.oilpress_admin.entities.content._base import ContentEntity


class Podcast(ContentEntity):
    title: str = Field(min_length=1)
    image: str = ""
    description: str = ""
    youtube_link: str = Field(
        default="", validation_alias=AliasChoices("youtube_link", "youtubeLink")
    )
    admin_name: str = Field(
        default="", validation_alias=AliasChoices("admin_name", "adminName")
    )
    date: str = ""
