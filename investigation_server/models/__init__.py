"""Pydantic request/response models for the API."""

from .common import ERROR_RESPONSES, ErrorDetail, ErrorResponse
from .sessions import (
    AccusationResultResponse,
    AudioEventRequest,
    AudioEventResponse,
    CreateSessionRequest,
    SelectAccusationRequest,
    SelectMajorBranchRequest,
    SelectSubBranchRequest,
    SessionResponse,
)

__all__ = [
    "ERROR_RESPONSES",
    "ErrorDetail",
    "ErrorResponse",
    "AccusationResultResponse",
    "AudioEventRequest",
    "AudioEventResponse",
    "CreateSessionRequest",
    "SelectAccusationRequest",
    "SelectMajorBranchRequest",
    "SelectSubBranchRequest",
    "SessionResponse",
]
