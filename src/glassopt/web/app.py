"""ASGI application for the cut optimization API."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from glassopt import __version__
from glassopt.web.exceptions import register_exception_handlers
from glassopt.web.routers import export_router, optimize_router, validate_router

API_PREFIX = "/api/v1"


async def health() -> dict[str, str]:
    return {"status": "healthy"}


def create_app() -> FastAPI:
    """Build the API: versioned routers under ``/api/v1`` plus ``/health``."""
    app = FastAPI(
        title="GlassOpt API",
        description="Plan guillotine cuts of rectangular pieces from stock sheets",
        version=__version__,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router in (optimize_router, validate_router, export_router):
        app.include_router(router, prefix=API_PREFIX)
    app.add_api_route("/health", health, methods=["GET"], tags=["health"])
    return app


# Served by ``uvicorn glassopt.web:app``
app = create_app()
