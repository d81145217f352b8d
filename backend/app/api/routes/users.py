"""Users — REST surface for the User resource.

Invariants:
    - Routes never contain business logic: one UserService call each
    - Bodies serialize with camelCase aliases; absent optional fields omitted
    - 204 responses carry no body

Design Decisions:
    - Return explicit Response objects: the status code comes from the service,
      not from the decorator (one route answers 200, 400, 401 or 404)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_credentials, get_user_service
from app.core.domain_types import UserId
from app.schemas.envelope import ErrorResponse
from app.schemas.user import (
    CreateRequest,
    UpdateRequest,
    UserListResponse,
    UserResponse,
)
from app.services.user_service import ServiceResponse, UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


def to_http_response(result: ServiceResponse) -> Response:
    """Serialize a ServiceResponse for the wire."""
    if result.body is None:
        return Response(status_code=result.status_code)
    return JSONResponse(
        status_code=result.status_code,
        content=result.body.model_dump(
            mode="json", by_alias=True, exclude_none=True,
        ),
    )


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED, responses=_ERRORS,
)
async def create_user(
    body: CreateRequest, service: UserService = Depends(get_user_service),
):
    """Create a user. The repository assigns its id."""
    return to_http_response(await service.create_user(body))


@router.get("", response_model=UserListResponse)
async def get_all_users(service: UserService = Depends(get_user_service)):
    """Snapshot of every stored user, in no particular order."""
    return to_http_response(await service.get_all_users())


@router.get("/{user_id}", response_model=UserResponse, responses=_ERRORS)
async def get_user_by_id(
    user_id: UUID, service: UserService = Depends(get_user_service),
):
    return to_http_response(await service.get_user_by_id(UserId(user_id)))


@router.put("/{user_id}", response_model=UserResponse, responses=_ERRORS)
async def update_user(
    user_id: UUID,
    body: UpdateRequest,
    credentials: str | None = Depends(get_credentials),
    service: UserService = Depends(get_user_service),
):
    """Replace a user wholesale. The path id is the storage key."""
    return to_http_response(
        await service.update_user(credentials, UserId(user_id), body),
    )


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_ERRORS,
)
async def delete_user(
    user_id: UUID,
    credentials: str | None = Depends(get_credentials),
    service: UserService = Depends(get_user_service),
):
    return to_http_response(
        await service.delete_user(credentials, UserId(user_id)),
    )
