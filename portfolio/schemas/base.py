# portfolio/schemas/base.py
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire (pageId, jobTitle, ...)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


def not_null(value: Any) -> Any:
    # PATCH bodies may omit a NOT NULL column but never send it as null
    if value is None:
        raise ValueError("cannot be null")
    return value
