"""In-process repository for local runs and tests."""

from __future__ import annotations

import copy
import itertools
import threading
from datetime import datetime, timezone
from typing import Any

from app.utils.constants import DEFAULT_TOPICS, SESSION_ACTIVE, SESSION_COMPLETED


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryRepository:
    """Same interface as ``PsycopgRepository``, kept in dicts behind a lock."""

    def __init__(self, topics=DEFAULT_TOPICS) -> None:
        self._lock = threading.Lock()
        self._topic_ids = itertools.count(1)
        self._session_ids = itertools.count(1)
        self._question_ids = itertools.count(1)
        self._topics: dict[int, dict[str, Any]] = {}
        self._sessions: dict[int, dict[str, Any]] = {}
        self._questions: dict[int, dict[str, Any]] = {}
        self.seed_topics(list(topics))

    def seed_topics(self, topics: list[dict[str, str]]) -> None:
        with self._lock:
            by_name = {t["name"]: t for t in self._topics.values()}
            for topic in topics:
                existing = by_name.get(topic["name"])
                if existing is not None:
                    existing["description"] = topic.get("description")
                    continue
                topic_id = next(self._topic_ids)
                self._topics[topic_id] = {
                    "id": topic_id,
                    "name": topic["name"],
                    "description": topic.get("description"),
                }

    def list_topics(self) -> list[dict[str, Any]]:
        with self._lock:
            rows = sorted(self._topics.values(), key=lambda t: t["name"])
            return copy.deepcopy(rows)

    def get_topic(self, topic_id: int) -> dict[str, Any] | None:
        with self._lock:
            return copy.deepcopy(self._topics.get(topic_id))

    def create_quiz_session(self, topic_id, custom_topic, custom_text, skill_level: str) -> dict[str, Any]:
        with self._lock:
            session_id = next(self._session_ids)
            row = {
                "id": session_id,
                "topic_id": topic_id,
                "custom_topic": custom_topic,
                "custom_text": custom_text,
                "skill_level": skill_level,
                "status": SESSION_ACTIVE,
                "score": None,
                "total_questions": None,
                "created_at": _now(),
                "completed_at": None,
            }
            self._sessions[session_id] = row
            return copy.deepcopy(row)

    def get_quiz_session(self, session_id: int) -> dict[str, Any] | None:
        with self._lock:
            return copy.deepcopy(self._sessions.get(session_id))

    def complete_quiz_session(self, session_id: int, score: int, total_questions: int) -> dict[str, Any] | None:
        with self._lock:
            row = self._sessions.get(session_id)
            if row is None:
                return None
            row.update(
                status=SESSION_COMPLETED,
                score=score,
                total_questions=total_questions,
                completed_at=_now(),
            )
            return copy.deepcopy(row)

    def insert_questions(self, session_id: int, questions: list[dict[str, Any]]) -> list[dict[str, Any]]:
        inserted = []
        with self._lock:
            for q in questions:
                question_id = next(self._question_ids)
                row = {
                    "id": question_id,
                    "session_id": session_id,
                    "question_text": q["question_text"],
                    "question_type": q["question_type"],
                    "options": list(q["options"]),
                    "correct_answer": q["correct_answer"],
                    "difficulty": q["difficulty"],
                    "user_answer": None,
                    "is_correct": None,
                    "created_at": _now(),
                }
                self._questions[question_id] = row
                inserted.append(copy.deepcopy(row))
        return inserted

    def get_questions(self, session_id: int) -> list[dict[str, Any]]:
        with self._lock:
            rows = [q for q in self._questions.values() if q["session_id"] == session_id]
            return copy.deepcopy(sorted(rows, key=lambda q: q["id"]))

    def get_question(self, question_id: int) -> dict[str, Any] | None:
        with self._lock:
            return copy.deepcopy(self._questions.get(question_id))

    def record_answer(self, question_id: int, user_answer: str, is_correct: bool) -> dict[str, Any] | None:
        with self._lock:
            row = self._questions.get(question_id)
            if row is None:
                return None
            row.update(user_answer=user_answer, is_correct=is_correct)
            return copy.deepcopy(row)
