from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.weather_lookup.api.dependencies import (
    ServiceContainer,
    build_services,
)
from src.weather_lookup.api.responses import error_response
from src.weather_lookup.api.routes import geocode, queries, weather, youtube
from src.weather_lookup.config import (
    Settings,
    load_settings,
    resolve_api_keys,
)
from src.weather_lookup.services.logger_service import get_logger

logger = get_logger(__name__)

APP_NAME = "Weather Lookup API"
APP_VERSION = "1.0.0"


def create_app(
    settings: Optional[Settings] = None,
    services: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Build the FastAPI application.

    When `services` is given it is used as is and nothing is created or
    disposed at startup; otherwise the container is built from settings
    inside the lifespan, after API keys are resolved.

    Args:
        settings (Optional[Settings]): Configuration; read from the
            environment when omitted.
        services (Optional[ServiceContainer]): Pre-built services.

    Returns:
        FastAPI: The configured application.
    """
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if services is not None:
            yield
            return

        resolved = await resolve_api_keys(settings)
        container = build_services(resolved)
        await container.store.init_schema()
        app.state.services = container
        logger.info(f"🚀 {APP_NAME} {APP_VERSION} started")
        try:
            yield
        finally:
            await container.store.dispose()
            logger.info("🛑 Services shut down")

    app = FastAPI(title=APP_NAME, version=APP_VERSION, lifespan=lifespan)
    if services is not None:
        app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(f"⚠️ Invalid request to {request.url.path}")
        return error_response(400, "Invalid request")

    app.include_router(geocode.router)
    app.include_router(weather.router)
    app.include_router(youtube.router)
    app.include_router(queries.router)

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"ok": True, "name": APP_NAME, "version": APP_VERSION}

    return app
