"""Shared pydantic base for persisted records."""
from typing import Any

from pydantic import BaseModel, ConfigDict


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class CamelModel(BaseModel):
    """Model persisted and served with camelCase keys (moodEntries, loginCount, ...)."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)

    def to_storage(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
