"""API routers for the REST API."""

from glassopt.web.routers.export import router as export_router
from glassopt.web.routers.optimize import router as optimize_router
from glassopt.web.routers.validate import router as validate_router

__all__ = [
    "export_router",
    "optimize_router",
    "validate_router",
]
