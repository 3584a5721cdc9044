"""
Shared module - Wire-format base schema.

The API speaks camelCase while the ORM models and columns use snake_case.
Every request/response schema derives from CamelModel, so the translation
lives in exactly one place: field names match column names, and aliases
match wire names.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Pydantic base that reads and writes camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


__all__ = ["CamelModel", "to_camel"]
