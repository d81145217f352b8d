"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps UUID — repository keys are always UserId
    - Claims is opaque: produced by the extractor, never inspected by the core

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from enum import Enum
from typing import Callable, NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)


# ─── Authentication ──────────────────────────────────────────────

Claims = NewType("Claims", object)

# raw credential header value (None when absent) -> claims, or None if rejected
ClaimsExtractor = Callable[[str | None], Claims | None]


# ─── Enums ───────────────────────────────────────────────────────

class UserOperation(str, Enum):
    """Service operations — used as log/error context."""
    CREATE = "create_user"
    GET = "get_user_by_id"
    LIST = "get_all_users"
    UPDATE = "update_user"
    DELETE = "delete_user"


# ─── Limits ──────────────────────────────────────────────────────

MAX_ID_ALLOCATION_ATTEMPTS = 8
