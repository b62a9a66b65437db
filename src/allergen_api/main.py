"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from allergen_api.api.routes import logo, maps, menu, restaurants
from allergen_api.core.config import get_settings
from allergen_api.core.exceptions import APIError
from allergen_api.services.logo_lookup import factory as logo_factory
from allergen_api.services.menu_recognition import factory as menu_recognition_factory
from allergen_api.services.places import factory as places_factory

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} v{settings.api_version}")
    logger.info(
        "Providers configured: "
        f"gemini={settings.is_gemini_configured}, "
        f"google_places={settings.is_places_configured}, "
        f"logo.dev={settings.is_logodev_configured}"
    )

    yield

    # Shutdown
    logger.info("Shutting down...")
    await menu_recognition_factory.close_service()
    await places_factory.close_service()
    await logo_factory.close_service()
    logger.info("Upstream clients closed")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        debug=settings.debug,
        description="Menu allergen scanning and restaurant matching API",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle custom API errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "details": exc.details,
            },
        )

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        settings = get_settings()

        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.api_version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "providers": {
                "gemini": settings.is_gemini_configured,
                "googlePlaces": settings.is_places_configured,
                "logoDev": settings.is_logodev_configured,
            },
        }

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.app_name,
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    # Include routers
    app.include_router(maps.router, prefix="/api/maps", tags=["Maps"])
    app.include_router(restaurants.router, prefix="/api/restaurants", tags=["Restaurants"])
    app.include_router(logo.router, prefix="/api/logo", tags=["Logo"])
    app.include_router(menu.router, prefix="/api", tags=["Menu"])

    return app


# Create app instance
app = create_app()
