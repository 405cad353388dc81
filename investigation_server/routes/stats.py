"""Stats endpoint."""

from fastapi import APIRouter

try:
    from ..state import get_state
except ImportError:
    from state import get_state

router = APIRouter()


@router.get("/stats")
def get_stats():
    """Session counts per state (only for stores that can enumerate sessions)."""
    state = get_state()
    store = state.sessions
    if not hasattr(store, "count_by_state"):
        return {"available": False, "message": f"{type(store).__name__} does not report session counts"}
    by_state = store.count_by_state()
    return {
        "available": True,
        "active_sessions": sum(by_state.values()),
        "sessions_by_state": by_state,
    }
