"""
Tests for answer recording and full-set validation.
"""

import pytest

from campaign_story.errors import AnswerValidationError, SessionNotFoundError
from campaign_story.session import Answer, AnswerRecorder, SessionStore, Tone, validate_answers


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def recorder(store):
    return AnswerRecorder(store, store.create())


class TestAnswer:
    """Tests for AnswerRecorder.answer()."""

    def test_append_new_answers_in_order(self, recorder, store):
        """New question ids are appended and persisted."""
        recorder.answer("name", "Alex")
        recorder.answer("condition", "Spinal cord injury")

        stored = store.get(recorder.session_id).answers
        assert [a.question_id for a in stored] == ["name", "condition"]
        assert stored[0].answer == "Alex"

    def test_overwrite_keeps_position(self, recorder, store):
        """Re-answering a question replaces it in place."""
        recorder.answer("name", "Alex")
        recorder.answer("condition", "Spinal cord injury")
        recorder.answer("name", "Alexandra")

        stored = store.get(recorder.session_id).answers
        assert [a.question_id for a in stored] == ["name", "condition"]
        assert stored[0].answer == "Alexandra"

    def test_answer_clears_skip(self, recorder, store):
        """Answering a skipped question un-skips it."""
        recorder.skip("age")
        recorder.answer("age", "34")

        stored = store.get(recorder.session_id).answers
        assert stored[0].skipped is False
        assert stored[0].answer == "34"

    def test_follow_up_recorded(self, recorder, store):
        """Follow-up text is stored alongside the answer."""
        recorder.answer("loved_qualities", "My laugh", follow_up="They say I'm loyal")

        stored = store.get(recorder.session_id).answers[0]
        assert stored.follow_up_answer == "They say I'm loyal"

    def test_unknown_question(self, recorder, store):
        """Unknown ids are rejected and nothing is stored."""
        with pytest.raises(AnswerValidationError):
            recorder.answer("favorite_color", "Blue")

        assert store.get(recorder.session_id).answers == []

    def test_tone_answer_sets_session_tone(self, recorder, store):
        """A supported tone answer also sets the session tone."""
        recorder.answer("tone", "Light hearted")

        assert store.get(recorder.session_id).tone == Tone.LIGHT_HEARTED

    def test_free_text_tone_answer(self, recorder, store):
        """An unsupported tone answer is kept as text only."""
        recorder.answer("tone", "something in between")

        session = store.get(recorder.session_id)
        assert session.tone is None
        assert session.answers[0].answer == "something in between"

    def test_missing_session(self, store):
        """Recording into a removed session surfaces the lookup error."""
        session_id = store.create()
        recorder = AnswerRecorder(store, session_id)
        store.delete(session_id)

        with pytest.raises(SessionNotFoundError):
            recorder.answer("name", "Alex")

    def test_failed_save_keeps_local_answers(self, store):
        """An answer the store rejected is not kept by the recorder."""
        session_id = store.create()
        recorder = AnswerRecorder(store, session_id)
        recorder.answer("name", "Alex")
        store.delete(session_id)

        with pytest.raises(SessionNotFoundError):
            recorder.answer("age", "30")
        with pytest.raises(SessionNotFoundError):
            recorder.answer("name", "Sam")

        assert [(a.question_id, a.answer) for a in recorder.answers] == [("name", "Alex")]


class TestSkip:
    """Tests for AnswerRecorder.skip()."""

    def test_skip_new_question(self, recorder, store):
        """Skipping an unanswered question appends an empty skipped answer."""
        recorder.skip("hospital")

        stored = store.get(recorder.session_id).answers[0]
        assert stored.question_id == "hospital"
        assert stored.answer == ""
        assert stored.skipped is True

    def test_skip_keeps_text(self, recorder, store):
        """Skipping an answered question keeps its text."""
        recorder.answer("hospital", "St. Mary's")
        recorder.skip("hospital")

        stored = store.get(recorder.session_id).answers
        assert len(stored) == 1
        assert stored[0].answer == "St. Mary's"
        assert stored[0].skipped is True

    def test_skip_required_question_allowed(self, recorder, store):
        """Required questions can still be skipped."""
        recorder.skip("name")

        assert store.get(recorder.session_id).answers[0].skipped is True

    def test_failed_skip_keeps_local_answers(self, store):
        """A skip the store rejected leaves the recorder unchanged."""
        session_id = store.create()
        recorder = AnswerRecorder(store, session_id)
        recorder.answer("hospital", "St. Mary's")
        store.delete(session_id)

        with pytest.raises(SessionNotFoundError):
            recorder.skip("hospital")
        with pytest.raises(SessionNotFoundError):
            recorder.skip("age")

        answers = recorder.answers
        assert len(answers) == 1
        assert answers[0].skipped is False

    def test_skip_does_not_touch_caller_answers(self, store):
        """Answers handed to the recorder are copied, not shared."""
        session_id = store.create()
        given = [Answer(question_id="hospital", answer="St. Mary's")]
        recorder = AnswerRecorder(store, session_id, given)

        recorder.skip("hospital")

        assert given[0].skipped is False
        assert recorder.answers[0].skipped is True


class TestForSession:
    """Tests for resuming a recorder."""

    def test_resume_from_store(self, store):
        """Recorder picks up stored answers and keeps merging."""
        session_id = store.create()
        store.replace_answers(session_id, [Answer(question_id="name", answer="Alex")])

        recorder = AnswerRecorder.for_session(store, session_id)
        recorder.answer("age", "40")

        assert [a.question_id for a in store.get(session_id).answers] == ["name", "age"]

    def test_answers_property_is_copy(self, recorder):
        """Changing the returned list does not change the recorder."""
        recorder.answer("name", "Alex")
        answers = recorder.answers
        answers[0].answer = "Changed"

        assert recorder.answers[0].answer == "Alex"


class TestValidateAnswers:
    """Tests for full-set validation."""

    def test_valid_set(self, sample_answers):
        """Known, unique ids pass through in order."""
        validated = validate_answers(iter(sample_answers))

        assert [a.question_id for a in validated] == ["name", "interesting_things", "struggles"]

    def test_empty_set(self):
        """An empty answer set is valid."""
        assert validate_answers([]) == []

    def test_unknown_id(self):
        """Unknown ids are rejected."""
        with pytest.raises(AnswerValidationError, match="Unknown question id"):
            validate_answers([Answer(question_id="nope", answer="x")])

    def test_duplicate_id(self):
        """Two answers for one question are rejected."""
        with pytest.raises(AnswerValidationError, match="Duplicate"):
            validate_answers([
                Answer(question_id="name", answer="Alex"),
                Answer(question_id="name", answer="Sam"),
            ])
