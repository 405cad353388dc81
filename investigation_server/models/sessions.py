"""Session-related Pydantic models."""

from typing import Dict, List, Optional

from pydantic import BaseModel

from investigation import PlaybackOutcome, SessionState


class CreateSessionRequest(BaseModel):
    podcast_id: str


class SelectMajorBranchRequest(BaseModel):
    major_branch_id: str


class SelectSubBranchRequest(BaseModel):
    sub_branch_id: str


class SelectAccusationRequest(BaseModel):
    accusation_id: str


class AudioEventRequest(BaseModel):
    """Playback signal for the clip played in `segment`."""

    segment: SessionState
    outcome: PlaybackOutcome = PlaybackOutcome.FINISHED
    reason: Optional[str] = None
    # Session revision when the clip started; omit to accept any signal for `segment`
    revision: Optional[int] = None


class SessionResponse(BaseModel):
    session_id: str
    podcast_id: str
    state: SessionState
    selected_major_branches: List[str]
    selected_sub_branches: Dict[str, List[str]]
    current_major_branch_id: Optional[str] = None
    created_at: str
    revision: int
    max_major: int
    allowed_operations: List[str] = []


class AccusationResultResponse(BaseModel):
    session: SessionResponse
    is_correct: bool
    result_audio_url: str


class AudioEventResponse(BaseModel):
    applied: bool
    session: SessionResponse
