"""Shared base model for all API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys; snake_case names are accepted too.

    ``from_attributes`` allows building a model straight from an
    ``sqlite3.Row`` converted with ``dict(row)``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _reject_null(cls, value: Any) -> Any:
    if value is None:
        raise ValueError("may be omitted but not null")
    return value


def not_null(*fields: str):
    """Validator for partial-update fields backed by NOT NULL columns.

    Omitting such a field leaves the column alone; sending an explicit
    ``null`` is a validation error.  Defaults are not validated, so
    only client-supplied values reach the check.
    """
    return field_validator(*fields)(_reject_null)
