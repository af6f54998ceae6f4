"""Shared pydantic configuration for wire schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase names on the wire.

    Python code uses snake_case attributes; JSON bodies, query models and
    responses use the camelCase aliases (``parentId``, ``productCount``...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CamelRequest(CamelModel):
    """Request body schema; unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")
