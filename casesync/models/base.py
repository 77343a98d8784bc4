"""Shared pydantic base for wire-compatible models.

All entities serialize with camelCase field names to match the backend's
JSON shape while exposing snake_case attributes in Python.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        """Return a JSON-ready dict using wire (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


class FrozenCamelModel(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


__all__ = ["CamelModel", "FrozenCamelModel"]
