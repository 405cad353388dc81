"""
Investigation engine: guarded state transitions over session records.

Every operation is one atomic read-guard-write through the session store:
the store hands the operation a private copy of the session under the
record's exclusive section, and only writes it back if the operation returns
without raising. A rejected call therefore leaves the stored session as it
was, which is what makes duplicate triggers safe to deliver.

Usage:
    engine = InvestigationEngine(content_provider, session_store)
    session = engine.create_session(podcast_id)
    engine.start_investigation(session.session_id)
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from .errors import InvalidState, NotFound, OwnershipMismatch, QuotaExceeded, StaleRevision
from .models import Accusation, InvestigationSession, MajorBranch, MinorBranch, Podcast
from .quotas import (
    MAX_SUB_BRANCHES_PER_MAJOR,
    can_select_major,
    is_major_selection_complete,
    is_sub_selection_complete,
    max_selectable_major,
)
from .states import MAJOR_SUBFLOW_STATES, OPERATION_GUARDS, SessionState, is_legal_transition

logger = logging.getLogger(__name__)


@dataclass
class AccusationResult:
    """Outcome of the final accusation; delivered once, never stored on the session."""

    session: InvestigationSession
    is_correct: bool
    result_audio_url: str


def _require_state(session: InvestigationSession, operation: str) -> None:
    allowed = OPERATION_GUARDS[operation]
    if session.state not in allowed:
        raise InvalidState(operation, session.state.value, [s.value for s in allowed])


def _require_revision(session: InvestigationSession, operation: str, expected: Optional[int]) -> None:
    if expected is not None and session.revision != expected:
        raise StaleRevision(operation, session.revision, expected)


def _assert_invariants(session: InvestigationSession) -> None:
    in_subflow = session.state in MAJOR_SUBFLOW_STATES
    if in_subflow != (session.current_major_branch_id is not None):
        raise RuntimeError(
            f"current_major_branch_id={session.current_major_branch_id!r} inconsistent with state {session.state.value}"
        )
    if in_subflow and session.current_major_branch_id not in session.selected_major_branches:
        raise RuntimeError(f"current major branch {session.current_major_branch_id} was never selected")
    for major_id, picks in session.selected_sub_branches.items():
        if len(picks) > MAX_SUB_BRANCHES_PER_MAJOR:
            raise RuntimeError(f"major branch {major_id} holds {len(picks)} sub branches")


class InvestigationEngine:
    """Session engine: the only component that mutates sessions."""

    def __init__(self, content, store):
        """
        Args:
            content: ContentProvider (read-only narrative content)
            store: SessionStore with atomic per-session update()
        """
        self._content = content
        self._store = store

    # ------------------------------------------------------------------
    # Content queries
    # ------------------------------------------------------------------

    def get_podcast(self, podcast_id: str) -> Podcast:
        podcast = self._content.get_podcast(podcast_id)
        if podcast is None:
            raise NotFound("Podcast", podcast_id)
        return podcast

    def list_major_branches(self, podcast_id: str) -> List[MajorBranch]:
        self.get_podcast(podcast_id)
        return self._content.list_major_branches(podcast_id)

    def list_minor_branches(self, major_branch_id: str) -> List[MinorBranch]:
        if self._content.get_major_branch(major_branch_id) is None:
            raise NotFound("Major branch", major_branch_id)
        return self._content.list_minor_branches(major_branch_id)

    def list_accusations(self, podcast_id: str) -> List[Accusation]:
        self.get_podcast(podcast_id)
        return self._content.list_accusations(podcast_id)

    def max_major_for(self, podcast_id: str) -> int:
        return max_selectable_major(len(self._content.list_major_branches(podcast_id)))

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def create_session(self, podcast_id: str) -> InvestigationSession:
        """Start a new run of a podcast in INTRO with empty selections."""
        self.get_podcast(podcast_id)
        session = InvestigationSession(session_id=uuid.uuid4().hex, podcast_id=podcast_id)
        self._store.create(session)
        logger.info("[sessions] created %s for podcast %s", session.session_id, podcast_id)
        return session

    def get_session(self, session_id: str) -> InvestigationSession:
        session = self._store.get(session_id)
        if session is None:
            raise NotFound("Session", session_id)
        return session

    def _transition(
        self,
        session_id: str,
        operation: str,
        apply: Callable[[InvestigationSession], Any],
    ) -> Tuple[InvestigationSession, Any]:
        """Run apply() on a private copy under the session's lock and commit it."""

        def _guarded(session: InvestigationSession) -> Any:
            before = session.state
            result = apply(session)
            if not is_legal_transition(before, session.state):
                raise RuntimeError(f"{operation} produced illegal edge {before.value} -> {session.state.value}")
            _assert_invariants(session)
            session.revision += 1
            return result

        try:
            updated, result = self._store.update(session_id, _guarded)
        except (InvalidState, StaleRevision) as e:
            # Expected for duplicate or late triggers
            logger.info("[sessions] %s rejected for %s: %s", operation, session_id, e.message)
            raise
        except Exception as e:
            logger.warning("[sessions] %s rejected for %s: %s", operation, session_id, e)
            raise
        logger.info("[sessions] %s: %s now %s", operation, session_id, updated.state.value)
        return updated, result

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start_investigation(self, session_id: str) -> InvestigationSession:
        def apply(session: InvestigationSession) -> None:
            _require_state(session, "start_investigation")
            session.state = SessionState.MAIN_SELECTION

        return self._transition(session_id, "start_investigation", apply)[0]

    def select_major_branch(self, session_id: str, major_branch_id: str) -> InvestigationSession:
        def apply(session: InvestigationSession) -> None:
            _require_state(session, "select_major_branch")
            branch = self._content.get_major_branch(major_branch_id)
            if branch is None:
                raise NotFound("Major branch", major_branch_id)
            if branch.podcast_id != session.podcast_id:
                raise OwnershipMismatch(
                    f"Major branch {major_branch_id} does not belong to podcast {session.podcast_id}"
                )
            session.add_major_branch(major_branch_id, self.max_major_for(session.podcast_id))
            session.current_major_branch_id = major_branch_id
            session.state = SessionState.MAIN_INTRO

        return self._transition(session_id, "select_major_branch", apply)[0]

    def finish_main_intro(
        self, session_id: str, expected_revision: Optional[int] = None
    ) -> InvestigationSession:
        """
        Leave MAIN_INTRO once the major branch intro clip has ended.

        expected_revision, when given, is the session revision the clip started
        at; any later transition makes the call raise StaleRevision.
        """

        def apply(session: InvestigationSession) -> None:
            _require_state(session, "finish_main_intro")
            _require_revision(session, "finish_main_intro", expected_revision)
            session.state = SessionState.SUB_SELECTION

        return self._transition(session_id, "finish_main_intro", apply)[0]

    def select_sub_branch(self, session_id: str, sub_branch_id: str) -> InvestigationSession:
        def apply(session: InvestigationSession) -> None:
            current = session.current_major_branch_id
            # A third pick inside the active major branch is a quota violation
            # whether or not the second clip is still playing.
            if session.state in MAJOR_SUBFLOW_STATES and is_sub_selection_complete(session, current):
                raise QuotaExceeded(
                    f"Cannot select more than {MAX_SUB_BRANCHES_PER_MAJOR} sub branch(es) for major branch {current}"
                )
            _require_state(session, "select_sub_branch")
            branch = self._content.get_minor_branch(sub_branch_id)
            if branch is None:
                raise NotFound("Sub branch", sub_branch_id)
            if branch.major_branch_id != current:
                raise OwnershipMismatch(
                    f"Sub branch {sub_branch_id} does not belong to the current major branch {current}"
                )
            session.add_sub_branch(current, sub_branch_id)
            session.state = SessionState.SUB_PLAYING

        return self._transition(session_id, "select_sub_branch", apply)[0]

    def return_to_sub_selection(self, session_id: str) -> InvestigationSession:
        def apply(session: InvestigationSession) -> None:
            _require_state(session, "return_to_sub_selection")
            if is_sub_selection_complete(session, session.current_major_branch_id):
                raise QuotaExceeded("Both sub branches already chosen; finish the major branch instead")
            session.state = SessionState.SUB_SELECTION

        return self._transition(session_id, "return_to_sub_selection", apply)[0]

    def finish_sub_branch(self, session_id: str) -> InvestigationSession:
        def apply(session: InvestigationSession) -> None:
            _require_state(session, "finish_sub_branch")
            current = session.current_major_branch_id
            if not is_sub_selection_complete(session, current):
                raise QuotaExceeded(
                    f"Major branch {current} needs {MAX_SUB_BRANCHES_PER_MAJOR} sub branches, "
                    f"has {session.sub_count(current)}"
                )
            session.current_major_branch_id = None
            session.state = SessionState.MAIN_SELECTION

        return self._transition(session_id, "finish_sub_branch", apply)[0]

    def advance_after_sub_branch(
        self, session_id: str, expected_revision: Optional[int] = None
    ) -> InvestigationSession:
        """Leave SUB_PLAYING along the edge implied by the active branch's pick count."""

        def apply(session: InvestigationSession) -> None:
            _require_state(session, "advance_after_sub_branch")
            _require_revision(session, "advance_after_sub_branch", expected_revision)
            if is_sub_selection_complete(session, session.current_major_branch_id):
                session.current_major_branch_id = None
                session.state = SessionState.MAIN_SELECTION
            else:
                session.state = SessionState.SUB_SELECTION

        return self._transition(session_id, "advance_after_sub_branch", apply)[0]

    def proceed_to_accusations(self, session_id: str) -> InvestigationSession:
        def apply(session: InvestigationSession) -> None:
            _require_state(session, "proceed_to_accusations")
            total = len(self._content.list_major_branches(session.podcast_id))
            if not is_major_selection_complete(session, total):
                raise QuotaExceeded(
                    f"Not all major branches have been selected yet "
                    f"({len(session.selected_major_branches)}/{max_selectable_major(total)})"
                )
            session.state = SessionState.ACCUSATION_INTRO

        return self._transition(session_id, "proceed_to_accusations", apply)[0]

    def finish_accusation_intro(
        self, session_id: str, expected_revision: Optional[int] = None
    ) -> InvestigationSession:
        def apply(session: InvestigationSession) -> None:
            _require_state(session, "finish_accusation_intro")
            _require_revision(session, "finish_accusation_intro", expected_revision)
            session.state = SessionState.ACCUSATION_SELECTION

        return self._transition(session_id, "finish_accusation_intro", apply)[0]

    def select_accusation(self, session_id: str, accusation_id: str) -> AccusationResult:
        def apply(session: InvestigationSession) -> Tuple[bool, str]:
            _require_state(session, "select_accusation")
            accusation = self._content.get_accusation(accusation_id)
            if accusation is None:
                raise NotFound("Accusation", accusation_id)
            if accusation.podcast_id != session.podcast_id:
                raise OwnershipMismatch(
                    f"Accusation {accusation_id} does not belong to podcast {session.podcast_id}"
                )
            podcast = self.get_podcast(session.podcast_id)
            audio = podcast.result_audio_url(accusation.is_correct) or accusation.audio_url
            session.state = SessionState.RESULT
            return accusation.is_correct, audio

        updated, (is_correct, audio) = self._transition(session_id, "select_accusation", apply)
        return AccusationResult(session=updated, is_correct=is_correct, result_audio_url=audio)

    def allowed_operations(self, session: InvestigationSession) -> List[str]:
        """Operation names whose state and quota guards the session currently satisfies."""
        total_major = len(self._content.list_major_branches(session.podcast_id))
        sub_complete = is_sub_selection_complete(session, session.current_major_branch_id)
        quota_ok = {
            "select_major_branch": can_select_major(session, total_major),
            "select_sub_branch": not sub_complete,
            "return_to_sub_selection": not sub_complete,
            "finish_sub_branch": sub_complete,
            "proceed_to_accusations": is_major_selection_complete(session, total_major),
        }
        return [
            op
            for op, states in OPERATION_GUARDS.items()
            if session.state in states and quota_ok.get(op, True)
        ]
