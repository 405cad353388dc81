"""
Audio investigation session engine.

Usage:
    from investigation import InvestigationEngine, SessionState
"""

from .dispatcher import AudioEventDispatcher, PlaybackOutcome
from .engine import AccusationResult, InvestigationEngine
from .errors import (
    DuplicateSelection,
    InvalidState,
    InvestigationError,
    NotFound,
    OwnershipMismatch,
    QuotaExceeded,
    StaleRevision,
)
from .models import Accusation, InvestigationSession, MajorBranch, MinorBranch, Podcast
from .quotas import (
    MAX_SUB_BRANCHES_PER_MAJOR,
    can_select_major,
    can_select_sub,
    is_major_selection_complete,
    is_sub_selection_complete,
    max_selectable_major,
)
from .states import TRANSITIONS, SessionState

__all__ = [
    "AudioEventDispatcher",
    "PlaybackOutcome",
    "AccusationResult",
    "InvestigationEngine",
    "InvestigationError",
    "NotFound",
    "OwnershipMismatch",
    "InvalidState",
    "QuotaExceeded",
    "DuplicateSelection",
    "StaleRevision",
    "Accusation",
    "InvestigationSession",
    "MajorBranch",
    "MinorBranch",
    "Podcast",
    "MAX_SUB_BRANCHES_PER_MAJOR",
    "can_select_major",
    "can_select_sub",
    "is_major_selection_complete",
    "is_sub_selection_complete",
    "max_selectable_major",
    "TRANSITIONS",
    "SessionState",
]
