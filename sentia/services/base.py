"""Shared pydantic base for models exchanged with the vision service."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case fields in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def as_text(value: Any) -> str:
    """Coerce a loosely-typed response value to a string, ``None`` becoming empty."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value)
