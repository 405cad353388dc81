"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .root import router as root_router
from .podcasts import router as podcasts_router
from .podcasts import branches_router
from .sessions import router as sessions_router
from .stats import router as stats_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(podcasts_router, prefix="/api/podcasts", tags=["content"])
    app.include_router(branches_router, prefix="/api/major-branches", tags=["content"])
    app.include_router(sessions_router, prefix="/api/sessions", tags=["sessions"])
    app.include_router(stats_router, prefix="/api", tags=["stats"])
