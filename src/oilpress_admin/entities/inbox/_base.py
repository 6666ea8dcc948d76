from typing import Any

from pydantic import model_validator

from src.oilpress_admin.entities.core._base import Entity


class InboxEntity(Entity):
    """A record written by the storefront and only read by the admin.

    Missing or null text fields read as empty strings.
    """

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data
