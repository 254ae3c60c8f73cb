from fastapi import FastAPI

from .dashboard import router as dashboard_router
from .jobs import router as jobs_router
from .reports import router as reports_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(reports_router)
    app.include_router(jobs_router)
    app.include_router(dashboard_router)
