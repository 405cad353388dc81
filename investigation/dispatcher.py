"""
Audio event dispatcher: applies playback signals to a session.

Playback reports exactly one of finished / failed per clip, but delivery to
the server is at-least-once and may arrive late. Each signal names the
segment (the state whose clip ended) and, optionally, the session revision
the clip started at. The same segment recurs within a run (SUB_PLAYING after
every minor pick, MAIN_INTRO after every major pick), so only the revision
tells a late signal from an earlier clip apart from the current one. The
engine checks both inside the session update; no deduplication is kept here.
A failed clip advances the narrative exactly like a finished one.
"""

import logging
from enum import Enum
from typing import Optional

from .engine import InvestigationEngine
from .errors import InvalidState, StaleRevision
from .models import InvestigationSession
from .states import SessionState

logger = logging.getLogger(__name__)


class PlaybackOutcome(str, Enum):
    FINISHED = "finished"
    FAILED = "failed"


# Segments whose clip end drives a transition
AUDIO_GATED_SEGMENTS = frozenset(
    {SessionState.MAIN_INTRO, SessionState.SUB_PLAYING, SessionState.ACCUSATION_INTRO}
)


class AudioEventDispatcher:
    """Routes playback completion signals to the matching engine transition."""

    def __init__(self, engine: InvestigationEngine):
        self._engine = engine

    def on_audio_complete(
        self,
        session_id: str,
        segment: SessionState,
        outcome: PlaybackOutcome = PlaybackOutcome.FINISHED,
        reason: Optional[str] = None,
        revision: Optional[int] = None,
    ) -> Optional[InvestigationSession]:
        """
        Advance the session past `segment`.

        `revision` is the session revision returned by the call that started
        the clip. Without it, any signal for the current segment is applied.

        Returns the updated session, or None when the signal was a duplicate or
        arrived after the session had already moved on.
        """
        segment = SessionState(segment)
        outcome = PlaybackOutcome(outcome)
        if segment not in AUDIO_GATED_SEGMENTS:
            raise ValueError(f"No audio-gated transition out of {segment.value}")
        if outcome is PlaybackOutcome.FAILED:
            logger.warning(
                "[audio] playback failed for session %s in %s (%s); continuing",
                session_id,
                segment.value,
                reason or "no reason given",
            )
        session = self._engine.get_session(session_id)
        if session.state != segment or (revision is not None and session.revision != revision):
            logger.info(
                "[audio] ignoring %s signal for %s@%s: session %s already in %s@%d",
                outcome.value,
                segment.value,
                revision if revision is not None else "-",
                session_id,
                session.state.value,
                session.revision,
            )
            return None
        try:
            if segment is SessionState.MAIN_INTRO:
                return self._engine.finish_main_intro(session_id, revision)
            if segment is SessionState.ACCUSATION_INTRO:
                return self._engine.finish_accusation_intro(session_id, revision)
            return self._engine.advance_after_sub_branch(session_id, revision)
        except (InvalidState, StaleRevision):
            # Lost the race to a concurrent delivery of the same signal
            logger.info("[audio] duplicate %s signal for session %s", segment.value, session_id)
            return None
