"""
Audio event dispatcher tests.

Signals are at-least-once and may be stale; failed playback advances the
narrative exactly like finished playback.
"""

import logging

import pytest

from investigation import AudioEventDispatcher, NotFound, PlaybackOutcome, SessionState


@pytest.fixture
def dispatcher(engine):
    return AudioEventDispatcher(engine)


class TestAudioEventDispatcher:
    def test_main_intro_finished(self, engine, dispatcher, main_selection_id):
        engine.select_major_branch(main_selection_id, "body")
        session = dispatcher.on_audio_complete(main_selection_id, SessionState.MAIN_INTRO)
        assert session.state == SessionState.SUB_SELECTION

    def test_duplicate_signal_is_ignored(self, engine, dispatcher, main_selection_id):
        engine.select_major_branch(main_selection_id, "body")
        first = dispatcher.on_audio_complete(main_selection_id, SessionState.MAIN_INTRO)
        assert dispatcher.on_audio_complete(main_selection_id, SessionState.MAIN_INTRO) is None
        assert engine.get_session(main_selection_id).model_dump() == first.model_dump()

    def test_stale_signal_does_not_advance_later_segment(self, engine, dispatcher, sub_selection_id):
        engine.select_sub_branch(sub_selection_id, "body-1")
        # Late "intro finished" arriving while the first minor clip plays
        assert dispatcher.on_audio_complete(sub_selection_id, SessionState.MAIN_INTRO) is None
        assert engine.get_session(sub_selection_id).state == SessionState.SUB_PLAYING

    def test_late_signal_from_earlier_minor_clip(self, engine, dispatcher, sub_selection_id):
        first = engine.select_sub_branch(sub_selection_id, "body-1")
        dispatcher.on_audio_complete(sub_selection_id, SessionState.SUB_PLAYING, revision=first.revision)
        second = engine.select_sub_branch(sub_selection_id, "body-2")

        late = dispatcher.on_audio_complete(sub_selection_id, SessionState.SUB_PLAYING, revision=first.revision)
        assert late is None
        assert engine.get_session(sub_selection_id).model_dump() == second.model_dump()

        session = dispatcher.on_audio_complete(sub_selection_id, SessionState.SUB_PLAYING, revision=second.revision)
        assert session.state == SessionState.MAIN_SELECTION

    def test_late_signal_from_earlier_major_intro(self, engine, dispatcher, main_selection_id):
        earlier = engine.select_major_branch(main_selection_id, "body")
        dispatcher.on_audio_complete(main_selection_id, SessionState.MAIN_INTRO, revision=earlier.revision)
        engine.select_sub_branch(main_selection_id, "body-1")
        engine.return_to_sub_selection(main_selection_id)
        engine.select_sub_branch(main_selection_id, "body-2")
        engine.finish_sub_branch(main_selection_id)
        current = engine.select_major_branch(main_selection_id, "social-circle")

        assert dispatcher.on_audio_complete(main_selection_id, "MAIN_INTRO", revision=earlier.revision) is None
        assert engine.get_session(main_selection_id).state == SessionState.MAIN_INTRO

        session = dispatcher.on_audio_complete(main_selection_id, "MAIN_INTRO", revision=current.revision)
        assert session.state == SessionState.SUB_SELECTION
        assert session.current_major_branch_id == "social-circle"

    def test_revision_checked_inside_update(self, engine, dispatcher, sub_selection_id, monkeypatch):
        first = engine.select_sub_branch(sub_selection_id, "body-1")
        snapshot = engine.get_session(sub_selection_id)
        # Another signal lands between the dispatcher's read and its update
        engine.advance_after_sub_branch(sub_selection_id)
        engine.select_sub_branch(sub_selection_id, "body-2")
        monkeypatch.setattr(engine, "get_session", lambda session_id: snapshot)

        assert dispatcher.on_audio_complete(sub_selection_id, SessionState.SUB_PLAYING, revision=first.revision) is None
        monkeypatch.undo()
        assert engine.get_session(sub_selection_id).sub_branches_for("body") == ["body-1", "body-2"]
        assert engine.get_session(sub_selection_id).state == SessionState.SUB_PLAYING

    def test_failed_playback_advances(self, engine, dispatcher, main_selection_id, caplog):
        engine.select_major_branch(main_selection_id, "body")
        with caplog.at_level(logging.WARNING, logger="investigation.dispatcher"):
            session = dispatcher.on_audio_complete(
                main_selection_id, SessionState.MAIN_INTRO, PlaybackOutcome.FAILED, reason="decoder error"
            )
        assert session.state == SessionState.SUB_SELECTION
        assert "decoder error" in caplog.text

    def test_sub_clip_end_loops_or_closes_branch(self, engine, dispatcher, sub_selection_id):
        engine.select_sub_branch(sub_selection_id, "body-1")
        session = dispatcher.on_audio_complete(sub_selection_id, SessionState.SUB_PLAYING)
        assert session.state == SessionState.SUB_SELECTION

        engine.select_sub_branch(sub_selection_id, "body-3")
        session = dispatcher.on_audio_complete(sub_selection_id, SessionState.SUB_PLAYING, "failed")
        assert session.state == SessionState.MAIN_SELECTION
        assert session.current_major_branch_id is None

    def test_accusation_intro(self, engine, dispatcher, main_selection_id, complete_major):
        complete_major(main_selection_id, "body")
        complete_major(main_selection_id, "digital-trace")
        engine.proceed_to_accusations(main_selection_id)
        session = dispatcher.on_audio_complete(main_selection_id, "ACCUSATION_INTRO")
        assert session.state == SessionState.ACCUSATION_SELECTION

    @pytest.mark.parametrize("segment", ["INTRO", "MAIN_SELECTION", "SUB_SELECTION", "RESULT"])
    def test_segments_without_audio_gate(self, dispatcher, session_id, segment):
        with pytest.raises(ValueError):
            dispatcher.on_audio_complete(session_id, segment)

    def test_unknown_session(self, dispatcher):
        with pytest.raises(NotFound):
            dispatcher.on_audio_complete("missing", SessionState.MAIN_INTRO)
