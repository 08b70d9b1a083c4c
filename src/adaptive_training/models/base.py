"""Shared pydantic base for camelCase payloads."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class CamelModel(BaseModel):
    """Base model accepting both camelCase payload keys and field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a camelCase dictionary for JSON serialization."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)
