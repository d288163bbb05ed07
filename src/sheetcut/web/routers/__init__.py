"""API routers for the REST API."""

from sheetcut.web.routers.optimize import router as optimize_router
from sheetcut.web.routers.validate import router as validate_router

__all__ = [
    "optimize_router",
    "validate_router",
]
