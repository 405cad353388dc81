"""Session transition endpoints: one POST per engine operation."""

import logging
from typing import Callable

from fastapi import APIRouter, HTTPException

from investigation import InvestigationSession
from investigation.errors import InvestigationError

try:
    from ..state import get_state
    from ..utils import to_http_exception, to_session_response
    from ..models import (
        ERROR_RESPONSES,
        AccusationResultResponse,
        AudioEventRequest,
        AudioEventResponse,
        CreateSessionRequest,
        SelectAccusationRequest,
        SelectMajorBranchRequest,
        SelectSubBranchRequest,
        SessionResponse,
    )
except ImportError:
    from state import get_state
    from utils import to_http_exception, to_session_response
    from models import (
        ERROR_RESPONSES,
        AccusationResultResponse,
        AudioEventRequest,
        AudioEventResponse,
        CreateSessionRequest,
        SelectAccusationRequest,
        SelectMajorBranchRequest,
        SelectSubBranchRequest,
        SessionResponse,
    )

router = APIRouter(responses=ERROR_RESPONSES)
logger = logging.getLogger(__name__)


def _run(operation: Callable[[], InvestigationSession]) -> SessionResponse:
    """Run one engine call and shape the result; engine rejections become HTTP errors."""
    state = get_state()
    try:
        session = operation()
    except InvestigationError as e:
        raise to_http_exception(e)
    return to_session_response(session, state.engine)


@router.post("/create", response_model=SessionResponse)
def create_session(request: CreateSessionRequest):
    """Create a new investigation session in INTRO for a podcast."""
    engine = get_state().engine
    return _run(lambda: engine.create_session(request.podcast_id))


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(session_id: str):
    engine = get_state().engine
    return _run(lambda: engine.get_session(session_id))


@router.post("/{session_id}/start", response_model=SessionResponse)
def start_investigation(session_id: str):
    engine = get_state().engine
    return _run(lambda: engine.start_investigation(session_id))


@router.post("/{session_id}/major-branches", response_model=SessionResponse)
def select_major_branch(session_id: str, request: SelectMajorBranchRequest):
    engine = get_state().engine
    return _run(lambda: engine.select_major_branch(session_id, request.major_branch_id))


@router.post("/{session_id}/main-intro/finish", response_model=SessionResponse)
def finish_main_intro(session_id: str):
    engine = get_state().engine
    return _run(lambda: engine.finish_main_intro(session_id))


@router.post("/{session_id}/sub-branches", response_model=SessionResponse)
def select_sub_branch(session_id: str, request: SelectSubBranchRequest):
    engine = get_state().engine
    return _run(lambda: engine.select_sub_branch(session_id, request.sub_branch_id))


@router.post("/{session_id}/sub-selection/return", response_model=SessionResponse)
def return_to_sub_selection(session_id: str):
    engine = get_state().engine
    return _run(lambda: engine.return_to_sub_selection(session_id))


@router.post("/{session_id}/sub-branches/finish", response_model=SessionResponse)
def finish_sub_branch(session_id: str):
    engine = get_state().engine
    return _run(lambda: engine.finish_sub_branch(session_id))


@router.post("/{session_id}/accusations/proceed", response_model=SessionResponse)
def proceed_to_accusations(session_id: str):
    engine = get_state().engine
    return _run(lambda: engine.proceed_to_accusations(session_id))


@router.post("/{session_id}/accusation-intro/finish", response_model=SessionResponse)
def finish_accusation_intro(session_id: str):
    engine = get_state().engine
    return _run(lambda: engine.finish_accusation_intro(session_id))


@router.post("/{session_id}/accusation", response_model=AccusationResultResponse)
def select_accusation(session_id: str, request: SelectAccusationRequest):
    """
    Make the final accusation. The outcome is only returned here; it is not
    stored on the session, so the caller must keep this response.
    """
    engine = get_state().engine
    try:
        result = engine.select_accusation(session_id, request.accusation_id)
    except InvestigationError as e:
        raise to_http_exception(e)
    logger.info("[sessions] %s accused %s: correct=%s", session_id, request.accusation_id, result.is_correct)
    return AccusationResultResponse(
        session=to_session_response(result.session, engine),
        is_correct=result.is_correct,
        result_audio_url=result.result_audio_url,
    )


@router.post("/{session_id}/audio-events", response_model=AudioEventResponse)
def audio_event(session_id: str, request: AudioEventRequest):
    """
    Report that the clip for `segment` finished or failed.

    Send `revision` from the response that started the clip so a late signal
    from an earlier clip of the same segment cannot end the current one.
    Duplicate or late signals are acknowledged with applied=false and the
    current session; they are never errors.
    """
    state = get_state()
    try:
        updated = state.dispatcher.on_audio_complete(
            session_id,
            request.segment,
            request.outcome,
            reason=request.reason,
            revision=request.revision,
        )
        session = updated if updated is not None else state.engine.get_session(session_id)
    except InvestigationError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail={"error": "InvalidSegment", "message": str(e)})
    return AudioEventResponse(applied=updated is not None, session=to_session_response(session, state.engine))
