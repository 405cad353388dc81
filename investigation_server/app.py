"""
Audio Investigation API: FastAPI app factory.

Use: uvicorn investigation_server.app:app
Or:  from investigation_server import app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

try:
    from .config import get_config
    from .state import get_state
    from .routes import register_routes
except ImportError:
    from config import get_config
    from state import get_state
    from routes import register_routes

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, and startup."""
    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title="Audio Investigation API",
        description="Session engine for quota-limited audio investigation narratives",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)

    @app.on_event("startup")
    def _startup_check():
        state = get_state()
        ok, errors = state.config.validate()
        for err in errors:
            logger.warning("[startup] config: %s", err)
        logger.info(
            "[startup] Audio Investigation API ready: %d podcast(s), config valid=%s",
            len(state.content.list_podcasts()),
            ok,
        )

    return app


app = create_app()
