"""Routers package for the Task Scheduler."""

from .auth import router as auth_router
from .nextdate import router as nextdate_router
from .tasks import router as tasks_router

__all__ = ["auth_router", "nextdate_router", "tasks_router"]
