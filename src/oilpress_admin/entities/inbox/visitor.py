"""Entity: Visitor (a registered storefront user)."""

from pydantic import AliasChoices, Field

from src.oilpress_admin.entities.inbox._base import InboxEntity


class Visitor(InboxEntity):
    name: str = ""
    email: str = ""
    phone: str = Field(default="", validation_alias=AliasChoices("phone", "phoneNumber"))
