"""Entity: BulkOrder."""

from pydantic import AliasChoices, Field

from src.oilpress_admin.entities.inbox._base import InboxEntity


class BulkOrder(InboxEntity):
    first_name: str = Field(
        default="", validation_alias=AliasChoices("first_name", "firstName")
    )
    email: str = ""
    mobile_no: str = Field(
        default="",
        validation_alias=AliasChoices("mobile_no", "phoneNumber", "mobileNo", "phone_number"),
    )
    state: str = ""
    product_name: str = Field(
        default="", validation_alias=AliasChoices("product_name", "productName")
    )
    company_name: str = Field(
        default="", validation_alias=AliasChoices("company_name", "companyName")
    )
    message: str = ""
