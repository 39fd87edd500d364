"""
Shared pydantic configuration for request payloads and stored records.

Payload models never carry ``id`` or ``createdAt``: both are assigned by the
storage layer, and a body that tries to set them is rejected here so every
endpoint gets the same behaviour.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.json_schema import SkipJsonSchema
from pydantic.alias_generators import to_camel

SERVER_ASSIGNED_FIELDS = ("id", "created_at")

# Largest id a signed 64-bit INTEGER column can hold
MAX_RECORD_ID = 2**63 - 1


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PayloadModel(CamelModel):
    """Base for create/update bodies."""

    # Declared only so they can be rejected; hidden from the OpenAPI schema
    id: SkipJsonSchema[Optional[Any]] = Field(default=None, exclude=True)
    created_at: SkipJsonSchema[Optional[Any]] = Field(default=None, exclude=True)

    @field_validator(*SERVER_ASSIGNED_FIELDS, mode="before")
    @classmethod
    def _reject_server_assigned(cls, value):
        raise ValueError("is assigned by the server and cannot be set")

    def changes(self) -> dict:
        """Fields the caller actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def to_local_naive(value: datetime) -> datetime:
    """Appointment times are compared in server-local wall-clock time."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def reject_null(value):
    if value is None:
        raise ValueError("is required and cannot be null")
    return value
