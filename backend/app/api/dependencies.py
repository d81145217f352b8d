"""API Dependencies — FastAPI providers for the repository, claims extractor and service.

Invariants:
    - One repository per FastAPI app, held on app.state (never module-level)
    - Tests replace any provider via app.dependency_overrides

Design Decisions:
    - Repository created lazily on first use as well as in lifespan: ASGI test
      transports do not run lifespan, and no await separates check from assign
"""

from fastapi import Depends, Request

from app.config import get_settings
from app.core.domain_types import ClaimsExtractor
from app.core.repository_protocols import UserRepository
from app.infrastructure.auth import build_claims_extractor
from app.infrastructure.user_repository import InMemoryUserRepository
from app.services.user_service import UserService


def get_user_repository(request: Request) -> UserRepository:
    repository = getattr(request.app.state, "user_repository", None)
    if repository is None:
        repository = InMemoryUserRepository()
        request.app.state.user_repository = repository
    return repository


def get_claims_extractor() -> ClaimsExtractor:
    return build_claims_extractor(get_settings().require_api_key)


def get_credentials(request: Request) -> str | None:
    """Raw credential header value, or None when the header is absent."""
    return request.headers.get(get_settings().api_key_header)


def get_user_service(
    repository: UserRepository = Depends(get_user_repository),
    extract_claims: ClaimsExtractor = Depends(get_claims_extractor),
) -> UserService:
    return UserService(repository, extract_claims)
