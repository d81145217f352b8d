"""Envelope Builder — fresh header metadata for every message.

Invariants:
    - Every call returns a new uuid4 requestId
    - sendDate is UTC, truncated to millisecond precision
"""

from datetime import datetime, timezone
from uuid import uuid4

from app.schemas.envelope import RequestHeader, ResponseHeader


def _now_millis() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def build_response_header() -> ResponseHeader:
    """Header for an outgoing response. Never echoes the caller's requestId."""
    return ResponseHeader(request_id=uuid4(), send_date=_now_millis())


def build_request_header() -> RequestHeader:
    """Header for an outgoing request (clients, tests)."""
    return RequestHeader(request_id=uuid4(), send_date=_now_millis())
