"""Envelope Schemas — header metadata attached to every request and response.

Invariants:
    - requestId is a UUID, sendDate is a timezone-aware UTC datetime
    - sendDate serializes as ISO-8601 with millisecond precision and a "Z" suffix
    - ErrorResponse.message is omitted from the wire when absent

Design Decisions:
    - RequestHeader and ResponseHeader are separate types with the same shape:
      the request header is caller-supplied, the response header is always fresh
    - camelCase aliases on the wire, snake_case attributes in Python
"""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class _Header(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    request_id: UUID = Field(alias="requestId")
    send_date: datetime = Field(alias="sendDate")

    @field_serializer("send_date")
    def serialize_send_date(self, value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RequestHeader(_Header):
    """Caller-supplied header carried by create and update requests."""


class ResponseHeader(_Header):
    """Freshly generated header carried by every response."""


class ErrorResponse(BaseModel):
    """Structured error body — status code is authoritative, not the body."""
    model_config = ConfigDict(populate_by_name=True)

    response_header: ResponseHeader = Field(alias="responseHeader")
    code: str
    message: str | None = None
