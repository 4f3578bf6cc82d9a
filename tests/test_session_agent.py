"""Tests for the quiz session flow on the memory repository."""

import pytest

from app.agents import session_agent
from app.db.memory_repository import MemoryRepository
from app.llm.errors import ParseError
from app.schemas.api import StartSessionRequest
from app.schemas.quiz import GeneratedQuestion


class _FakeGenerator:
    def __init__(self, questions=None, error=None):
        self._questions = questions or []
        self._error = error
        self.requests = []

    def generate(self, request):
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return list(self._questions)


QUESTIONS = [
    GeneratedQuestion(
        question_text="Which pigment captures light?",
        question_type="multiple-choice",
        options=["Chlorophyll", "Keratin", "Melanin", "Hemoglobin"],
        correct_answer="Chlorophyll",
        difficulty="Easy",
    ),
    GeneratedQuestion(
        question_text="Photosynthesis releases oxygen.",
        question_type="true-false",
        options=["True", "False"],
        correct_answer="True",
    ),
]


@pytest.fixture
def repo():
    return MemoryRepository(topics=[{"name": "Photosynthesis", "description": "Plants and light"}])


def test_start_session_requires_topic_or_custom_input(repo):
    with pytest.raises(ValueError, match="Please select a topic"):
        session_agent.start_session(repo, StartSessionRequest(custom_topic="  ", skill_level="Beginner"))


def test_start_session_rejects_unknown_topic(repo):
    with pytest.raises(session_agent.NotFoundError):
        session_agent.start_session(repo, StartSessionRequest(topic_id=99))


def test_generate_for_session_uses_catalog_topic_name(repo):
    session = session_agent.start_session(repo, StartSessionRequest(topic_id=1, skill_level="Intermediate"))
    generator = _FakeGenerator(QUESTIONS)

    stored = session_agent.generate_for_session(repo, generator, session.id, num_questions=2)

    request = generator.requests[0]
    assert request.topic == "Photosynthesis"
    assert request.source_text is None
    assert request.skill_level == "Intermediate"
    assert request.question_count == 2
    assert [q.question_text for q in stored] == [q.question_text for q in QUESTIONS]
    assert all(q.session_id == session.id for q in stored)


def test_generate_for_session_passes_custom_text(repo):
    session = session_agent.start_session(
        repo, StartSessionRequest(custom_topic="Leaves", custom_text="Leaves are green.", skill_level="Advanced")
    )
    generator = _FakeGenerator(QUESTIONS)

    session_agent.generate_for_session(repo, generator, session.id)

    assert generator.requests[0].topic == "Leaves"
    assert generator.requests[0].source_text == "Leaves are green."


def test_generate_for_session_stores_nothing_on_failure(repo):
    session = session_agent.start_session(repo, StartSessionRequest(custom_topic="Leaves"))

    with pytest.raises(ParseError):
        session_agent.generate_for_session(repo, _FakeGenerator(error=ParseError("prose")), session.id)

    assert repo.get_questions(session.id) == []


def test_full_session_scores_answers(repo):
    session = session_agent.start_session(repo, StartSessionRequest(topic_id=1))
    stored = session_agent.generate_for_session(repo, _FakeGenerator(QUESTIONS), session.id)

    first = session_agent.submit_answer(repo, stored[0].id, "Chlorophyll")
    second = session_agent.submit_answer(repo, stored[1].id, "False")
    completed = session_agent.complete_session(repo, session.id)
    results = session_agent.get_results(repo, session.id)

    assert first.is_correct is True
    assert second.is_correct is False
    assert completed.status == "completed"
    assert completed.score == 1
    assert completed.total_questions == 2
    assert completed.completed_at is not None
    assert results.percentage == 50
    assert [q.user_answer for q in results.questions] == ["Chlorophyll", "False"]


def test_generate_for_completed_session_is_rejected(repo):
    session = session_agent.start_session(repo, StartSessionRequest(topic_id=1))
    session_agent.complete_session(repo, session.id)

    with pytest.raises(session_agent.SessionStateError, match="already completed"):
        session_agent.generate_for_session(repo, _FakeGenerator(QUESTIONS), session.id)


def test_results_for_empty_session_report_zero_percent(repo):
    session = session_agent.start_session(repo, StartSessionRequest(topic_id=1))
    session_agent.complete_session(repo, session.id)

    assert session_agent.get_results(repo, session.id).percentage == 0


def test_submit_answer_unknown_question(repo):
    with pytest.raises(session_agent.NotFoundError):
        session_agent.submit_answer(repo, 404, "True")
