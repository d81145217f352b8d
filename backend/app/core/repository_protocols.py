"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Implementations provided by shell via dependency injection
    - Every method returns or stores COPIES; callers never hold a stored User

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations await a lock (or IO in a future store)
"""

from typing import Protocol

from app.core.domain_types import UserId
from app.schemas.user import User


class UserRepository(Protocol):
    """Contract for the keyed User store — implemented by shell."""
    async def insert(self, user: User) -> UserId: ...
    async def get(self, user_id: UserId) -> User | None: ...
    async def list(self) -> list[User]: ...
    async def replace(self, user_id: UserId, user: User) -> None: ...
    async def remove(self, user_id: UserId) -> User: ...
    async def count(self) -> int: ...
