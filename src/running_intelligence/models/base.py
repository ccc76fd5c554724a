"""Shared pydantic base for camelCase records."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class CamelModel(BaseModel):
    """Record serialized with camelCase keys for the presentation layer."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


class FrozenCamelModel(CamelModel):
    """Immutable variant, safe to share from caches."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
