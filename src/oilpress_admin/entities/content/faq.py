"""Entity: Faq."""

from pydantic import Field

from src.oilpress_admin.entities.content._base import ContentEntity


class Faq(ContentEntity):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    category: str | None = None
