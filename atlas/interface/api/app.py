"""FastAPI application factory."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from atlas.config import Settings
from atlas.interface.api.middleware import AuthenticationMiddleware
from atlas.interface.api.routes import auth, health, metrics, users
from atlas.interface.api.routes.health import API_VERSION
from atlas.util.di.container import create_container, setup_di
from atlas.util.observability import instrument_fastapi, instrument_httpx

ROUTERS = (health.router, auth.router, users.router, metrics.router)


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    # Added last runs first: CORS answers preflights before authentication
    app.add_middleware(AuthenticationMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.frontend.cors_origins,
        allow_credentials=True,  # Session cookie is sent cross-origin
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=600,
    )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create the Atlas API.

    Logfire should be configured before this is called; ``start_app.py``
    does so in production.

    Args:
        container: DI container; the production container by default
    """
    settings = Settings()

    instrument_httpx()

    app_instance = FastAPI(
        title="Atlas API",
        description="Federated login and stateless session tokens",
        version=API_VERSION,
    )
    instrument_fastapi(app_instance)

    _add_middleware(app_instance, settings)
    setup_di(app_instance, container or create_container())

    for router in ROUTERS:
        app_instance.include_router(router)

    return app_instance


# Imported by uvicorn via start_app.py
app = create_app()
