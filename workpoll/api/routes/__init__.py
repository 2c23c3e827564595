"""
API routes module.
"""

from workpoll.api.routes.health import router as health_router
from workpoll.api.routes.work import router as work_router

__all__ = ["health_router", "work_router"]
