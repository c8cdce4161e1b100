# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Chirpy API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from app.config import Settings, get_settings
from app.exceptions import chirpy_exception_handler, unexpected_exception_handler
from app.routers import admin, chirps, health, users, webhooks
from app.auth import routes as auth_routes
from app.state import build_state
from lib.utils import ChirpyError

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup: bootstrap the database document (or wipe it when
    RESET_DATABASE_ON_START is set) before any request is served.
    """
    state = app.state.chirpy

    logger.info(f"Starting Chirpy API in {state.settings.ENVIRONMENT} mode")

    if state.settings.RESET_DATABASE_ON_START:
        state.store.reset()
    else:
        state.store.ensure_document()

    logger.info(f"Using database at {state.store.path}")

    yield

    logger.info("Shutting down Chirpy API")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Explicit settings (tests pass their own); defaults to
            the environment-loaded settings

    Returns:
        FastAPI: App with state, routers and handlers attached
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Chirpy API",
        description="Micro-blogging backend: users, chirps and session tokens.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Auth", "description": "Log in and receive a session token"},
            {"name": "Users", "description": "Sign up and update credentials"},
            {"name": "Chirps", "description": "Post, list and fetch chirps"},
            {"name": "Webhooks", "description": "Payment provider events"},
            {"name": "Admin", "description": "Metrics and development reset"},
            {"name": "Health", "description": "API readiness checks"},
        ],
    )
    app.state.chirpy = build_state(settings)

    # =========================================================================
    # Middleware
    # =========================================================================

    @app.middleware("http")
    async def count_api_requests(request: Request, call_next):
        """Count every request under /api for /admin/metrics."""
        if request.url.path.startswith("/api"):
            request.app.state.chirpy.metrics.increment()
        return await call_next(request)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(ChirpyError, chirpy_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(auth_routes.router, prefix="/api", tags=["Auth"])
    app.include_router(users.router, prefix="/api", tags=["Users"])
    app.include_router(chirps.router, prefix="/api", tags=["Chirps"])
    app.include_router(webhooks.router, prefix="/api", tags=["Webhooks"])
    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(admin.router, prefix="/admin", tags=["Admin"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT)
