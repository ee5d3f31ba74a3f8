"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import API_VERSION
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from infrastructure.database.session import engine

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    logger.info(
        "application_started",
        environment=settings.app_env,
        public_base_url=settings.public_base_url,
    )
    yield
    await engine.dispose()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## QR-linked Social Profiles\n\n"
            "Each user owns one profile addressed by an opaque UUID. "
            "A printed QR code encodes the profile's scan URL, and scanning it "
            "shows the published profile to anyone.\n\n"
            "### Access\n"
            "- `/api/v1/admin/*` requires an administrator bearer token:\n"
            "```\nAuthorization: Bearer <admin_token>\n```\n"
            "- `PUT /api/v1/qr/{uuid}` re-checks the owner's username and password "
            "on every call.\n"
            "- `/api/v1/public/*` and `/health` are open."
        ),
        version=API_VERSION,
        debug=settings.debug,
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "admin",
                "description": "User lifecycle and QR code management",
            },
            {
                "name": "auth",
                "description": "Owner credential check",
            },
            {
                "name": "profiles",
                "description": "Owner profile viewing and editing",
            },
            {
                "name": "public",
                "description": "Scan resolution and printable labels",
            },
        ],
    )

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
