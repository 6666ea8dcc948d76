"""Entity: Testimonial."""

from typing import Literal

from pydantic import AliasChoices, Field, model_validator

from src.oilpress_admin.entities.content._base import ContentEntity


class Testimonial(ContentEntity):
    """A customer quote, either written or recorded on video."""

    name: str = Field(min_length=1)
    image: str = ""
    location: str = ""
    description: str = ""
    rating: int = Field(default=5, ge=1, le=5)
    type: Literal["text", "video"] = "text"
    video_url: str | None = Field(
        default=None, validation_alias=AliasChoices("video_url", "videoUrl", "videoFile")
    )

    @model_validator(mode="after")
    def _video_needs_url(self):
        if self.type == "video" and not self.video_url:
            raise ValueError("Video testimonials need a video_url")
        return self
