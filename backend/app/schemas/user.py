"""User Schemas — wire models for the /api/users resource.

Invariants:
    - Pydantic checks wire types only (str, strict int, UUID); field rules live in
      core/validate_user.py so every violation reaches the client in one 400
    - User.id is None until the repository assigns one
    - Wire names are camelCase (personalId, requestHeader, usersList)

Design Decisions:
    - No Field(min_length/pattern) constraints here: a type error is a 422,
      a rule violation is a 400, and the two must stay distinguishable
    - age is strict: JSON "30" or true is a type error, never coerced to 30 or 1
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.envelope import RequestHeader, ResponseHeader


class User(BaseModel):
    """Identity + profile record."""
    model_config = ConfigDict(populate_by_name=True)

    id: UUID | None = None
    name: str
    surname: str
    age: int = Field(strict=True)
    personal_id: str = Field(alias="personalId")
    citizenship: str
    email: str | None = None


class CreateRequest(BaseModel):
    """POST /api/users body."""
    model_config = ConfigDict(populate_by_name=True)

    request_header: RequestHeader = Field(alias="requestHeader")
    user: User


class UpdateRequest(BaseModel):
    """PUT /api/users/{id} body."""
    model_config = ConfigDict(populate_by_name=True)

    request_header: RequestHeader = Field(alias="requestHeader")
    user: User


class UserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response_header: ResponseHeader = Field(alias="responseHeader")
    user: User


class UserListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response_header: ResponseHeader = Field(alias="responseHeader")
    users_list: list[User] = Field(alias="usersList")
