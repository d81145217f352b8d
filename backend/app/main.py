"""User Registry API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UserServiceError → structured ErrorResponse envelopes
    - CORS configured from settings (not hardcoded)
    - The user repository is created on startup and owned by app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py, registered once here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import health, users
from app.config import get_settings
from app.infrastructure.observability import setup_logging
from app.infrastructure.user_repository import InMemoryUserRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.user_repository = InMemoryUserRepository()
    logger.info(f"{settings.service_name} started")
    yield
    stored = await app.state.user_repository.count()
    logger.info(
        f"{settings.service_name} shutting down, discarding {stored} user(s)",
    )


settings = get_settings()
app = FastAPI(
    title="User Registry API", version=settings.version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)

register_error_handlers(app)


def run() -> None:
    """Serve the application with uvicorn (graceful shutdown on SIGINT/SIGTERM)."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
    )


if __name__ == "__main__":
    run()
