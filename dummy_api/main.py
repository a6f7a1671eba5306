"""
FastAPI Application Entry Point.

Dummy JSON API: greeting, user CRUD and admin seed/dump endpoints over a
hosted key-value store, with the interactive API docs served at the root.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from dummy_api.core.config import Settings
from dummy_api.core.container import (
    Container,
    get_container,
    get_container_dep,
    get_settings_dep,
)
from dummy_api.core.logging import configure_logging

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "greeting", "description": "Greeting related end-points"},
    {"name": "user", "description": "User related end-points"},
    {"name": "admin", "description": "Admin related end-points"},
    {"name": "health", "description": "Service status"},
]


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    app_name: str
    app_version: str
    timestamp: str
    debug: bool
    store_provider: str
    store_status: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: Initialize container, pre-load settings, create HTTP client
    - Shutdown: Close the record store and HTTP client
    """
    container = get_container()
    await container.startup()

    yield

    await container.shutdown()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_container().settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="User records over a hosted key-value store.",
        openapi_tags=OPENAPI_TAGS,
        docs_url="/",
        redoc_url=None,
        swagger_ui_parameters={"deepLinking": False},
        lifespan=lifespan,
    )

    # No credentials are involved, so any origin may call the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)

    return app


def register_routes(app: FastAPI) -> None:
    """
    Register all application routes.

    Args:
        app: FastAPI application instance.
    """
    from dummy_api.api.v1 import api_router

    app.include_router(api_router)

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["health"],
        summary="Health Check",
        description="Report service status and whether the record store answers.",
    )
    async def health_check(
        settings: Settings = Depends(get_settings_dep),
        container: Container = Depends(get_container_dep),
    ) -> HealthResponse:
        """
        Health check endpoint for readiness probes.

        Always answers 200; status is "degraded" when the store is
        unreachable or not configured.
        """
        store_status = await container.check_record_store()
        return HealthResponse(
            status="healthy" if store_status == "ok" else "degraded",
            app_name=settings.app_name,
            app_version=settings.app_version,
            timestamp=datetime.now(timezone.utc).isoformat(),
            debug=settings.debug,
            store_provider=settings.store.provider.value,
            store_status=store_status,
        )


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "dummy_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
