from fastapi import FastAPI

from .applications import router as applications_router
from .dashboard import router as dashboard_router
from .notifications import router as notifications_router
from .opportunities import router as opportunities_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(opportunities_router)
    app.include_router(applications_router)
    app.include_router(notifications_router)
    app.include_router(dashboard_router)
