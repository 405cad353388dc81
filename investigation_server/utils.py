"""Pure helpers: error mapping and session response formatting."""

from fastapi import HTTPException

from investigation import InvestigationEngine, InvestigationSession
from investigation.errors import InvestigationError

try:
    from .models import SessionResponse
except ImportError:
    from models import SessionResponse

# Engine error kind -> HTTP status
ERROR_STATUS = {
    "NotFound": 404,
    "OwnershipMismatch": 400,
    "InvalidState": 409,
    "QuotaExceeded": 409,
    "DuplicateSelection": 409,
    "StaleRevision": 409,
}


def to_http_exception(err: InvestigationError) -> HTTPException:
    """Convert an engine rejection to an HTTPException carrying its kind."""
    return HTTPException(status_code=ERROR_STATUS.get(err.kind, 400), detail=err.to_dict())


def to_session_response(session: InvestigationSession, engine: InvestigationEngine) -> SessionResponse:
    """Session snapshot plus derived quota and allowed operations."""
    return SessionResponse(
        session_id=session.session_id,
        podcast_id=session.podcast_id,
        state=session.state,
        selected_major_branches=list(session.selected_major_branches),
        selected_sub_branches={k: list(v) for k, v in session.selected_sub_branches.items()},
        current_major_branch_id=session.current_major_branch_id,
        created_at=session.created_at,
        revision=session.revision,
        max_major=engine.max_major_for(session.podcast_id),
        allowed_operations=engine.allowed_operations(session),
    )
