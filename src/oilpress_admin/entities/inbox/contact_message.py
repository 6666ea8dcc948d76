"""Entity: ContactMessage."""

from pydantic import AliasChoices, Field

from src.oilpress_admin.entities.inbox._base import InboxEntity


class ContactMessage(InboxEntity):
    first_name: str = Field(
        default="", validation_alias=AliasChoices("first_name", "firstName")
    )
    last_name: str = Field(
        default="", validation_alias=AliasChoices("last_name", "lastName")
    )
    email: str = ""
    phone: str = Field(default="", validation_alias=AliasChoices("phone", "phoneNumber"))
    message: str = ""
