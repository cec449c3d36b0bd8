"""API route modules."""

from .health import router as health_router
from .timesheets import router as timesheets_router

__all__ = ["health_router", "timesheets_router"]
