"""User Validation — pure field-rule checks for create and update payloads.

Invariants:
    - All functions are PURE: no IO, no async, no shared mutable state
    - Every rule is evaluated; violations are collected, never short-circuited
    - Patterns compiled once at import and matched against the whole value
    - Messages use wire field names (personalId, not personal_id)

Design Decisions:
    - Fixed table of named predicates over Pydantic field constraints: the
      client gets one 400 listing every failing field instead of a 422 per type
    - fullmatch over ^...$ anchors: "$" accepts a trailing newline in Python
    - validate_user() is the one entry point the service calls; it raises
      UserValidationError carrying both the joined message and the list
    - "Non-empty" means at least one character; whitespace-only names pass
"""

import re
from typing import Callable, NamedTuple

from app.core.errors import UserValidationError
from app.schemas.user import User

PERSONAL_ID_PATTERN = re.compile(r"[0-9]{11}")
CITIZENSHIP_PATTERN = re.compile(r"[A-Z]{2}")
EMAIL_PATTERN = re.compile(r"[\w\-.]+@([\w-]+\.)+[\w-]{2,4}")

MIN_AGE = 1
VIOLATION_SEPARATOR = "; "


class FieldRule(NamedTuple):
    field: str
    is_valid: Callable[[User], bool]
    message: str


RULES: tuple[FieldRule, ...] = (
    FieldRule("name", lambda u: len(u.name) > 0, "must not be empty"),
    FieldRule("surname", lambda u: len(u.surname) > 0, "must not be empty"),
    FieldRule("age", lambda u: u.age >= MIN_AGE, f"must be >= {MIN_AGE}"),
    FieldRule(
        "personalId",
        lambda u: PERSONAL_ID_PATTERN.fullmatch(u.personal_id) is not None,
        "must be exactly 11 digits",
    ),
    FieldRule(
        "citizenship",
        lambda u: CITIZENSHIP_PATTERN.fullmatch(u.citizenship) is not None,
        "must be exactly 2 uppercase letters",
    ),
    FieldRule(
        "email",
        lambda u: u.email is None or EMAIL_PATTERN.fullmatch(u.email) is not None,
        "must be a valid email address",
    ),
)


def collect_violations(user: User) -> list[str]:
    """Evaluate every rule in table order. Returns one message per failing field."""
    return [
        f"{rule.field}: {rule.message}"
        for rule in RULES
        if not rule.is_valid(user)
    ]


def validate_user(user: User) -> None:
    """Raise UserValidationError naming every failing field; return None when valid."""
    violations = collect_violations(user)
    if violations:
        raise UserValidationError(VIOLATION_SEPARATOR.join(violations), violations)
