"""User Service — orchestrates claims, validation, repository and envelopes per operation.

Invariants:
    - Validation runs BEFORE any repository mutation
    - Claims are checked before anything else on update/delete
    - UserValidationError, UserNotFoundError, UnauthorizedError never escape:
      they become ServiceResponse(4xx, ErrorResponse)
    - Fatal errors (IdentifierSpaceExhaustedError) propagate untouched
    - Every response carries a freshly built response header
    - No internal retries

Design Decisions:
    - Returns ServiceResponse instead of raising HTTPException: the service
      stays framework-free, routes only serialize
    - update returns the SUBMITTED candidate, not a re-read of the store
"""

import logging
from dataclasses import dataclass

from pydantic import BaseModel

from app.core.domain_types import ClaimsExtractor, UserId, UserOperation
from app.core.envelope import build_response_header
from app.core.errors import (
    ErrorContext,
    UnauthorizedError,
    UserNotFoundError,
    UserServiceError,
)
from app.core.repository_protocols import UserRepository
from app.core.validate_user import validate_user
from app.schemas.user import (
    CreateRequest,
    UpdateRequest,
    UserListResponse,
    UserResponse,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceResponse:
    """Status code plus body. body is None only for 204."""
    status_code: int
    body: BaseModel | None = None


class UserService:
    """Entry point the HTTP layer calls once per operation."""

    def __init__(self, repository: UserRepository, extract_claims: ClaimsExtractor):
        self._repository = repository
        self._extract_claims = extract_claims

    async def create_user(self, body: CreateRequest) -> ServiceResponse:
        try:
            validate_user(body.user)
        except UserServiceError as e:
            return _error_response(e, UserOperation.CREATE)
        user_id = await self._repository.insert(body.user)
        stored = body.user.model_copy(update={"id": user_id})
        logger.info(f"Created user {user_id}", extra={"user_id": str(user_id)})
        return ServiceResponse(
            201,
            UserResponse(response_header=build_response_header(), user=stored),
        )

    async def get_user_by_id(self, user_id: UserId) -> ServiceResponse:
        user = await self._repository.get(user_id)
        if user is None:
            return _error_response(UserNotFoundError(user_id), UserOperation.GET)
        return ServiceResponse(
            200,
            UserResponse(response_header=build_response_header(), user=user),
        )

    async def get_all_users(self) -> ServiceResponse:
        users = await self._repository.list()
        return ServiceResponse(
            200,
            UserListResponse(
                response_header=build_response_header(), users_list=users,
            ),
        )

    async def update_user(
        self, credentials: str | None, user_id: UserId, body: UpdateRequest,
    ) -> ServiceResponse:
        try:
            self._require_claims(credentials, UserOperation.UPDATE)
            validate_user(body.user)
            await self._repository.replace(user_id, body.user)
        except UserServiceError as e:
            if e.http_status >= 500:
                raise
            return _error_response(e, UserOperation.UPDATE, user_id)
        logger.info(f"Updated user {user_id}", extra={"user_id": str(user_id)})
        return ServiceResponse(
            200,
            UserResponse(response_header=build_response_header(), user=body.user),
        )

    async def delete_user(
        self, credentials: str | None, user_id: UserId,
    ) -> ServiceResponse:
        try:
            self._require_claims(credentials, UserOperation.DELETE)
            await self._repository.remove(user_id)
        except UserServiceError as e:
            if e.http_status >= 500:
                raise
            return _error_response(e, UserOperation.DELETE)
        logger.info(f"Deleted user {user_id}", extra={"user_id": str(user_id)})
        return ServiceResponse(204)

    def _require_claims(self, credentials: str | None, operation: UserOperation):
        if self._extract_claims(credentials) is None:
            raise UnauthorizedError(ErrorContext(operation=operation.value))


def _error_response(
    error: UserServiceError, operation: UserOperation, user_id: UserId | None = None,
) -> ServiceResponse:
    error.context.operation = error.context.operation or operation.value
    error.context.user_id = error.context.user_id or user_id
    logger.warning(
        f"{error.context.operation} failed: {error.message}",
        extra={
            "error_code": error.code,
            "error_category": error.category.value,
            "severity": error.severity.value,
            "status_code": error.http_status,
            "user_id": str(error.context.user_id) if error.context.user_id else None,
        },
    )
    return ServiceResponse(error.http_status, error.to_response())
