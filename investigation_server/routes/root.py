"""Root and health endpoints."""

from fastapi import APIRouter

try:
    from ..state import get_state
except ImportError:
    from state import get_state

router = APIRouter()

API_VERSION = "1.0.0"


@router.get("/")
def root():
    state = get_state()
    return {
        "name": "Audio Investigation API",
        "version": API_VERSION,
        "content": {
            "source": state.config.content_source,
            "podcasts": len(state.content.list_podcasts()),
        },
        "session_store": type(state.sessions).__name__,
        "endpoints": {
            "content": [
                "/api/podcasts",
                "/api/podcasts/{id}",
                "/api/podcasts/{id}/major-branches",
                "/api/podcasts/{id}/accusations",
                "/api/major-branches/{id}/minor-branches",
            ],
            "sessions": ["/api/sessions/create", "/api/sessions/{id}", "/api/sessions/{id}/audio-events"],
        },
    }


@router.get("/api/health")
def health():
    state = get_state()
    config_ok, config_errors = state.config.validate()
    return {
        "status": "healthy",
        "config_valid": config_ok,
        "config_errors": config_errors,
        "content_provider": type(state.content).__name__,
        "session_store": type(state.sessions).__name__,
    }
