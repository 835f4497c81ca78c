"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prp.config import Settings
from prp.interface.api.errors import register_error_handlers
from prp.interface.api.routes import (
    auth,
    endorsements,
    health,
    invites,
    moderation,
    press_releases,
)
from prp.util.di.container import create_container, setup_di
from prp.util.error import ConfigurationError
from prp.util.observability import instrument_fastapi, instrument_httpx

INSECURE_SECRET = "CHANGE_ME_IN_PRODUCTION"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    await app.state.dishka_container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this; scripts/start_app.py
    does so in production.

    Args:
        container: DI container to use instead of the production one

    Raises:
        ConfigurationError: If production runs with placeholder secrets
    """
    settings = Settings()

    if settings.environment == "production" and (
        settings.auth.jwt_secret == INSECURE_SECRET
        or settings.auth.firebase.api_key == INSECURE_SECRET
    ):
        raise ConfigurationError(
            "Production requires AUTH__JWT_SECRET and AUTH__FIREBASE__API_KEY"
        )

    instrument_httpx()

    app_instance = FastAPI(
        title="Press Release Portal API",
        description="Vetted members submit press releases; moderators publish them",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=600,
    )

    container = container or create_container()
    setup_di(app_instance, container)

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(invites.router)
    app_instance.include_router(endorsements.router)
    app_instance.include_router(press_releases.router)
    app_instance.include_router(moderation.router)

    return app_instance
