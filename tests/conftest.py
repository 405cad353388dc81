"""Shared fixtures: seed content, in-memory store, engine, and sessions at useful positions."""

from pathlib import Path

import pytest

from investigation import InvestigationEngine
from investigation_server.services import InMemorySessionStore, JsonContentProvider

DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "sample_podcast.json"
PODCAST_ID = "test-investigation"

# Two extra podcasts: an odd major count (quota 1) and one without result clips
MULTI_PODCAST_CONTENT = {
    "podcasts": [
        {"id": "odd-case", "title": "Odd Case", "introAudioUrl": "https://example.com/odd/intro.mp3"},
        {"id": "other-case", "title": "Other Case", "introAudioUrl": "https://example.com/other/intro.mp3"},
    ],
    "mainBranches": [
        {"id": "odd-a", "podcastId": "odd-case", "title": "A", "introAudioUrl": "https://example.com/odd/a.mp3"},
        {"id": "odd-b", "podcastId": "odd-case", "title": "B", "introAudioUrl": "https://example.com/odd/b.mp3"},
        {"id": "odd-c", "podcastId": "odd-case", "title": "C", "introAudioUrl": "https://example.com/odd/c.mp3"},
        {"id": "other-a", "podcastId": "other-case", "title": "A", "introAudioUrl": "https://example.com/other/a.mp3"},
        {"id": "other-b", "podcastId": "other-case", "title": "B", "introAudioUrl": "https://example.com/other/b.mp3"},
    ],
    "subBranches": [
        {"id": f"{major}-{i}", "mainBranchId": major, "title": f"{major} {i}", "audioUrl": f"https://example.com/{major}/{i}.mp3"}
        for major in ("odd-a", "odd-b", "odd-c", "other-a", "other-b")
        for i in (1, 2, 3)
    ],
    "accusations": [
        {"id": "odd-guilty", "podcastId": "odd-case", "suspectName": "Guilty", "audioUrl": "https://example.com/odd/guilty.mp3", "isCorrect": True},
        {"id": "odd-innocent", "podcastId": "odd-case", "suspectName": "Innocent", "audioUrl": "https://example.com/odd/innocent.mp3", "isCorrect": False},
        {"id": "other-guilty", "podcastId": "other-case", "suspectName": "Guilty", "audioUrl": "https://example.com/other/guilty.mp3", "isCorrect": True},
    ],
}


@pytest.fixture
def content():
    return JsonContentProvider.from_file(DATA_PATH)


@pytest.fixture
def multi_content():
    return JsonContentProvider(MULTI_PODCAST_CONTENT)


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest.fixture
def engine(content, store):
    return InvestigationEngine(content, store)


@pytest.fixture
def multi_engine(multi_content):
    return InvestigationEngine(multi_content, InMemorySessionStore())


@pytest.fixture
def session_id(engine):
    """Fresh session in INTRO."""
    return engine.create_session(PODCAST_ID).session_id


@pytest.fixture
def main_selection_id(engine, session_id):
    """Session in MAIN_SELECTION with nothing picked."""
    engine.start_investigation(session_id)
    return session_id


@pytest.fixture
def sub_selection_id(engine, main_selection_id):
    """Session in SUB_SELECTION inside the "body" major branch, no minor picks yet."""
    engine.select_major_branch(main_selection_id, "body")
    engine.finish_main_intro(main_selection_id)
    return main_selection_id


@pytest.fixture
def two_picks_id(engine, sub_selection_id):
    """Session in SUB_PLAYING with body-1 and body-2 picked."""
    engine.select_sub_branch(sub_selection_id, "body-1")
    engine.return_to_sub_selection(sub_selection_id)
    engine.select_sub_branch(sub_selection_id, "body-2")
    return sub_selection_id


@pytest.fixture
def complete_major(engine):
    """Play one major branch through its two minor picks and back to MAIN_SELECTION."""

    def _complete(session_id: str, major_id: str, picks=(1, 2)):
        engine.select_major_branch(session_id, major_id)
        engine.finish_main_intro(session_id)
        first, second = picks
        engine.select_sub_branch(session_id, f"{major_id}-{first}")
        engine.return_to_sub_selection(session_id)
        engine.select_sub_branch(session_id, f"{major_id}-{second}")
        return engine.finish_sub_branch(session_id)

    return _complete
