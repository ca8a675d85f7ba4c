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
from api.routes import router as api_router
from api.routes.health import router as health_router
from core.config import APP_VERSION, Settings, get_settings
from core.logging import setup_logging
from infrastructure.database.session import build_engine, build_session_factory

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    settings: Settings = app.state.settings
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.app_env,
    )
    yield
    await app.state.engine.dispose()
    logger.info("application_shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    # Initialize structured logging
    setup_logging(settings)

    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Developer social network\n\n"
            "Register, build a developer profile, and share posts with "
            "likes and comments.\n\n"
            "### Authentication\n"
            "Private endpoints require the token returned by "
            "`POST /api/users` or `POST /api/auth` in the `x-auth-token` "
            "header:\n"
            "```\nx-auth-token: <your_token>\n```"
        ),
        version=APP_VERSION,
        debug=settings.debug,
        openapi_tags=[
            {
                "name": "users",
                "description": "Registration",
            },
            {
                "name": "auth",
                "description": "Login and the authenticated identity",
            },
            {
                "name": "profile",
                "description": "Developer profiles, experience, education and GitHub repos",
            },
            {
                "name": "posts",
                "description": "Posts, likes and comments",
            },
            {
                "name": "health",
                "description": "Health check endpoints",
            },
        ],
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.is_production)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = get_settings()
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=not config.is_production,
    )
