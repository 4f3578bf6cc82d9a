"""Repository backend selection."""

from __future__ import annotations

import logging

from app.config import settings
from app.db import repository as psycopg_repo
from app.db.memory_repository import MemoryRepository

logger = logging.getLogger(__name__)


class PsycopgRepository:
    """Adapter to expose psycopg2 module functions as an object."""

    def seed_topics(self, topics) -> None:
        return psycopg_repo.seed_topics(topics)

    def list_topics(self):
        return psycopg_repo.list_topics()

    def get_topic(self, topic_id: int):
        return psycopg_repo.get_topic(topic_id)

    def create_quiz_session(self, topic_id, custom_topic, custom_text, skill_level: str):
        return psycopg_repo.create_quiz_session(topic_id, custom_topic, custom_text, skill_level)

    def get_quiz_session(self, session_id: int):
        return psycopg_repo.get_quiz_session(session_id)

    def complete_quiz_session(self, session_id: int, score: int, total_questions: int):
        return psycopg_repo.complete_quiz_session(session_id, score, total_questions)

    def insert_questions(self, session_id: int, questions):
        return psycopg_repo.insert_questions(session_id, questions)

    def get_questions(self, session_id: int):
        return psycopg_repo.get_questions(session_id)

    def get_question(self, question_id: int):
        return psycopg_repo.get_question(question_id)

    def record_answer(self, question_id: int, user_answer: str, is_correct: bool):
        return psycopg_repo.record_answer(question_id, user_answer, is_correct)


_psycopg_repo = PsycopgRepository()
_memory_repo: MemoryRepository | None = None


def get_repository():
    backend = settings.db_backend.lower()
    if backend == "memory":
        return get_memory_repository()
    if backend in ("psycopg2", "postgres"):
        return _psycopg_repo
    raise RuntimeError(f"Unknown DB backend: {settings.db_backend}")


def get_psycopg_repository() -> PsycopgRepository:
    return _psycopg_repo


def get_memory_repository() -> MemoryRepository:
    global _memory_repo
    if _memory_repo is None:
        logger.info("Using in-memory quiz repository")
        _memory_repo = MemoryRepository()
    return _memory_repo
