"""Root conftest — shared fixtures: fresh repository, service and HTTP client per test.

Invariants:
    - Every test gets a brand-new InMemoryUserRepository (its lock binds to the
      test's event loop)
    - get_user_repository overridden on the app; overrides cleared after each test
"""

import os

# Keep test runs independent of a developer's .env
os.environ.setdefault("REQUIRE_API_KEY", "false")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_user_repository
from app.core.envelope import build_request_header
from app.infrastructure.auth import allow_all_claims
from app.infrastructure.user_repository import InMemoryUserRepository
from app.main import app
from app.schemas.user import CreateRequest, UpdateRequest, User
from app.services.user_service import UserService


def make_user(**overrides) -> User:
    fields = {
        "name": "Ana",
        "surname": "Li",
        "age": 30,
        "personal_id": "12345678901",
        "citizenship": "US",
    }
    fields.update(overrides)
    return User(**fields)


@pytest.fixture
def valid_user() -> User:
    return make_user()


@pytest.fixture
def user_factory():
    return make_user


@pytest.fixture
def create_request(valid_user) -> CreateRequest:
    return CreateRequest(request_header=build_request_header(), user=valid_user)


@pytest.fixture
def update_request_factory():
    def _build(**overrides) -> UpdateRequest:
        return UpdateRequest(
            request_header=build_request_header(), user=make_user(**overrides),
        )
    return _build


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def service(repository) -> UserService:
    return UserService(repository, allow_all_claims)


@pytest.fixture
def user_payload() -> dict:
    """Wire-format create/update body (camelCase)."""
    return {
        "requestHeader": {
            "requestId": "7f1c4f3e-2d55-4c1f-9a57-0d6b8e3f4a21",
            "sendDate": "2026-10-19T12:00:00.000Z",
        },
        "user": {
            "name": "Ana",
            "surname": "Li",
            "age": 30,
            "personalId": "12345678901",
            "citizenship": "US",
        },
    }


@pytest.fixture
async def client(repository):
    """FastAPI test client bound to this test's repository."""
    app.dependency_overrides[get_user_repository] = lambda: repository

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
