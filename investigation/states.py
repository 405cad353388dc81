"""
Session states and the legal transition table.

TRANSITIONS is the only edge set the engine may write along; every state has
an entry, RESULT is terminal.
"""

from enum import Enum
from typing import Dict, FrozenSet


class SessionState(str, Enum):
    """Narrative position of a session."""

    INTRO = "INTRO"
    MAIN_SELECTION = "MAIN_SELECTION"
    MAIN_INTRO = "MAIN_INTRO"
    SUB_SELECTION = "SUB_SELECTION"
    SUB_PLAYING = "SUB_PLAYING"
    ACCUSATION_INTRO = "ACCUSATION_INTRO"
    ACCUSATION_SELECTION = "ACCUSATION_SELECTION"
    RESULT = "RESULT"


TRANSITIONS: Dict[SessionState, FrozenSet[SessionState]] = {
    SessionState.INTRO: frozenset({SessionState.MAIN_SELECTION}),
    SessionState.MAIN_SELECTION: frozenset({SessionState.MAIN_INTRO, SessionState.ACCUSATION_INTRO}),
    SessionState.MAIN_INTRO: frozenset({SessionState.SUB_SELECTION}),
    SessionState.SUB_SELECTION: frozenset({SessionState.SUB_PLAYING, SessionState.MAIN_SELECTION}),
    SessionState.SUB_PLAYING: frozenset({SessionState.SUB_SELECTION, SessionState.MAIN_SELECTION}),
    SessionState.ACCUSATION_INTRO: frozenset({SessionState.ACCUSATION_SELECTION}),
    SessionState.ACCUSATION_SELECTION: frozenset({SessionState.RESULT}),
    SessionState.RESULT: frozenset(),
}

# States in which current_major_branch_id must be set
MAJOR_SUBFLOW_STATES: FrozenSet[SessionState] = frozenset(
    {SessionState.MAIN_INTRO, SessionState.SUB_SELECTION, SessionState.SUB_PLAYING}
)

# Operation name -> states its guard accepts
OPERATION_GUARDS: Dict[str, FrozenSet[SessionState]] = {
    "start_investigation": frozenset({SessionState.INTRO}),
    "select_major_branch": frozenset({SessionState.MAIN_SELECTION}),
    "finish_main_intro": frozenset({SessionState.MAIN_INTRO}),
    "select_sub_branch": frozenset({SessionState.SUB_SELECTION}),
    "return_to_sub_selection": frozenset({SessionState.SUB_PLAYING}),
    "finish_sub_branch": frozenset({SessionState.SUB_PLAYING, SessionState.SUB_SELECTION}),
    "advance_after_sub_branch": frozenset({SessionState.SUB_PLAYING}),
    "proceed_to_accusations": frozenset({SessionState.MAIN_SELECTION}),
    "finish_accusation_intro": frozenset({SessionState.ACCUSATION_INTRO}),
    "select_accusation": frozenset({SessionState.ACCUSATION_SELECTION}),
}


def is_legal_transition(current: SessionState, target: SessionState) -> bool:
    return target in TRANSITIONS[current]


def is_terminal(state: SessionState) -> bool:
    return not TRANSITIONS[state]
