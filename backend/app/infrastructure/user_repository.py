"""In-Memory User Repository — the single source of truth for stored Users.

Invariants:
    - Every stored User has id == its storage key (never None)
    - get/list/count hold the READ lock; insert/replace/remove hold the WRITE lock
    - replace checks presence and stores under ONE continuously held write lock
    - Values cross the boundary as deep copies in both directions
    - No IO under the lock

Design Decisions:
    - Volatile dict store: state lost on restart by design of the service
    - Instance owned by the FastAPI app (app.state), not a module-level dict
    - id_factory injectable so identifier exhaustion is testable
"""

import logging
from typing import Callable
from uuid import UUID, uuid4

from app.core.domain_types import MAX_ID_ALLOCATION_ATTEMPTS, UserId
from app.core.errors import IdentifierSpaceExhaustedError, UserNotFoundError
from app.infrastructure.rw_lock import ReadWriteLock
from app.schemas.user import User

logger = logging.getLogger(__name__)


class InMemoryUserRepository:
    """Concurrency-safe keyed User store."""

    def __init__(
        self,
        id_factory: Callable[[], UUID] = uuid4,
        max_id_attempts: int = MAX_ID_ALLOCATION_ATTEMPTS,
    ):
        self._users: dict[UserId, User] = {}
        self._lock = ReadWriteLock()
        self._id_factory = id_factory
        self._max_id_attempts = max_id_attempts

    async def insert(self, user: User) -> UserId:
        """Assign a fresh id, store a copy under it, return the id."""
        async with self._lock.write():
            user_id = self._allocate_id()
            self._users[user_id] = user.model_copy(
                update={"id": user_id}, deep=True,
            )
        return user_id

    async def get(self, user_id: UserId) -> User | None:
        async with self._lock.read():
            user = self._users.get(user_id)
            return user.model_copy(deep=True) if user else None

    async def list(self) -> list[User]:
        """Snapshot of all stored users. Order unspecified."""
        async with self._lock.read():
            return [u.model_copy(deep=True) for u in self._users.values()]

    async def replace(self, user_id: UserId, user: User) -> None:
        """Replace wholesale. The path key wins over the payload's own id."""
        async with self._lock.write():
            if user_id not in self._users:
                raise UserNotFoundError(user_id)
            self._users[user_id] = user.model_copy(
                update={"id": user_id}, deep=True,
            )

    async def remove(self, user_id: UserId) -> User:
        async with self._lock.write():
            user = self._users.pop(user_id, None)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def count(self) -> int:
        async with self._lock.read():
            return len(self._users)

    def _allocate_id(self) -> UserId:
        """Caller holds the write lock."""
        for _ in range(self._max_id_attempts):
            candidate = UserId(self._id_factory())
            if candidate not in self._users:
                return candidate
            logger.warning(f"User id collision on {candidate}, regenerating")
        logger.critical(
            f"User id allocation failed after {self._max_id_attempts} attempts",
        )
        raise IdentifierSpaceExhaustedError(self._max_id_attempts)
