"""Quiz session flow: start, generate, answer, complete, results."""

from __future__ import annotations

import logging

from app.agents.quiz_agent import QuestionGenerator
from app.schemas.api import SessionResults, StartSessionRequest
from app.schemas.quiz import GenerationRequest, QuestionRecord, QuizSession
from app.utils.constants import SESSION_COMPLETED

logger = logging.getLogger("uvicorn.error")


class NotFoundError(LookupError):
    """A session, topic or question id does not exist."""


class SessionStateError(Exception):
    """The session is not in a state that allows the operation."""


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _require_session(repo, session_id: int) -> dict:
    row = repo.get_quiz_session(session_id)
    if row is None:
        raise NotFoundError(f"Quiz session {session_id} not found")
    return row


def start_session(repo, payload: StartSessionRequest) -> QuizSession:
    """Create an active session from a topic pick or custom input."""
    custom_topic = _clean(payload.custom_topic)
    custom_text = _clean(payload.custom_text)
    if payload.topic_id is None and not custom_topic and not custom_text:
        raise ValueError("Please select a topic or provide custom content")
    if payload.topic_id is not None and repo.get_topic(payload.topic_id) is None:
        raise NotFoundError(f"Topic {payload.topic_id} not found")

    row = repo.create_quiz_session(payload.topic_id, custom_topic, custom_text, payload.skill_level)
    logger.info("Quiz session %s started (skill_level=%s)", row["id"], payload.skill_level)
    return QuizSession.model_validate(row)


def generate_for_session(
    repo,
    generator: QuestionGenerator,
    session_id: int,
    num_questions: int = 5,
) -> list[QuestionRecord]:
    """Generate questions for a session and store them.

    Generation errors propagate before anything is written.
    """
    session = _require_session(repo, session_id)
    if session["status"] == SESSION_COMPLETED:
        raise SessionStateError(f"Quiz session {session_id} is already completed")

    topic = session.get("custom_topic")
    if session.get("topic_id") is not None:
        topic_row = repo.get_topic(session["topic_id"])
        if topic_row is not None:
            topic = topic_row["name"]

    request = GenerationRequest(
        topic=topic,
        source_text=session.get("custom_text"),
        skill_level=session["skill_level"],
        question_count=num_questions,
    )
    questions = generator.generate(request)
    rows = repo.insert_questions(session_id, [q.model_dump() for q in questions])
    logger.info("Stored %s questions for quiz session %s", len(rows), session_id)
    return [QuestionRecord.model_validate(row) for row in rows]


def submit_answer(repo, question_id: int, answer: str) -> QuestionRecord:
    """Record an answer; correct means an exact match with the stored answer."""
    question = repo.get_question(question_id)
    if question is None:
        raise NotFoundError(f"Question {question_id} not found")
    is_correct = answer == question["correct_answer"]
    row = repo.record_answer(question_id, answer, is_correct)
    return QuestionRecord.model_validate(row)


def complete_session(repo, session_id: int) -> QuizSession:
    _require_session(repo, session_id)
    questions = repo.get_questions(session_id)
    score = sum(1 for q in questions if q.get("is_correct"))
    row = repo.complete_quiz_session(session_id, score, len(questions))
    logger.info("Quiz session %s completed: %s/%s", session_id, score, len(questions))
    return QuizSession.model_validate(row)


def get_results(repo, session_id: int) -> SessionResults:
    session = QuizSession.model_validate(_require_session(repo, session_id))
    questions = [QuestionRecord.model_validate(q) for q in repo.get_questions(session_id)]
    percentage = 0
    if session.score is not None and session.total_questions:
        percentage = round(session.score / session.total_questions * 100)
    return SessionResults(session=session, questions=questions, percentage=percentage)
