"""Database read/write queries for topics, quiz sessions and questions (psycopg2)."""

from __future__ import annotations

from typing import Any

from psycopg2.extras import Json, RealDictCursor, execute_values

from app.db.connection import get_connection, put_connection

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS topics (
    id          SERIAL PRIMARY KEY,
    name        TEXT NOT NULL UNIQUE,
    description TEXT
);

CREATE TABLE IF NOT EXISTS quiz_sessions (
    id              SERIAL PRIMARY KEY,
    topic_id        INTEGER REFERENCES topics (id),
    custom_topic    TEXT,
    custom_text     TEXT,
    skill_level     TEXT NOT NULL,
    status          TEXT NOT NULL DEFAULT 'active',
    score           INTEGER,
    total_questions INTEGER,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    completed_at    TIMESTAMPTZ
);

CREATE TABLE IF NOT EXISTS questions (
    id             SERIAL PRIMARY KEY,
    session_id     INTEGER NOT NULL REFERENCES quiz_sessions (id) ON DELETE CASCADE,
    question_text  TEXT NOT NULL,
    question_type  TEXT NOT NULL,
    options        JSONB NOT NULL,
    correct_answer TEXT NOT NULL,
    difficulty     TEXT NOT NULL DEFAULT 'Medium',
    user_answer    TEXT,
    is_correct     BOOLEAN,
    created_at     TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
"""

_SESSION_COLUMNS = (
    "id, topic_id, custom_topic, custom_text, skill_level, status, score, "
    "total_questions, created_at, completed_at"
)
_QUESTION_COLUMNS = (
    "id, session_id, question_text, question_type, options, correct_answer, "
    "difficulty, user_answer, is_correct, created_at"
)


def _execute(sql: str, params: list[Any] | None = None, *, fetch: str | None = None):
    conn = get_connection()
    try:
        with conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(sql, params or [])
            if fetch == "one":
                row = cur.fetchone()
                conn.commit()
                return row
            if fetch == "all":
                rows = cur.fetchall()
                conn.commit()
                return rows
            conn.commit()
            return None
    except Exception:
        conn.rollback()
        raise
    finally:
        put_connection(conn)


def init_schema() -> None:
    """Create the tables if they do not exist yet."""
    _execute(SCHEMA_SQL)


# --------------- topics ---------------

def seed_topics(topics: list[dict[str, str]]) -> None:
    """Insert catalog topics, refreshing descriptions of existing names."""
    for topic in topics:
        _execute(
            "INSERT INTO topics (name, description) VALUES (%s, %s) "
            "ON CONFLICT (name) DO UPDATE SET description = EXCLUDED.description",
            [topic["name"], topic.get("description")],
        )


def list_topics() -> list[dict[str, Any]]:
    return _execute("SELECT id, name, description FROM topics ORDER BY name", fetch="all")


def get_topic(topic_id: int) -> dict[str, Any] | None:
    return _execute(
        "SELECT id, name, description FROM topics WHERE id = %s",
        [topic_id],
        fetch="one",
    )


# --------------- quiz_sessions ---------------

def create_quiz_session(
    topic_id: int | None,
    custom_topic: str | None,
    custom_text: str | None,
    skill_level: str,
) -> dict[str, Any]:
    """Insert an active quiz session and return the stored row."""
    return _execute(
        "INSERT INTO quiz_sessions (topic_id, custom_topic, custom_text, skill_level, status) "
        f"VALUES (%s, %s, %s, %s, 'active') RETURNING {_SESSION_COLUMNS}",
        [topic_id, custom_topic, custom_text, skill_level],
        fetch="one",
    )


def get_quiz_session(session_id: int) -> dict[str, Any] | None:
    return _execute(
        f"SELECT {_SESSION_COLUMNS} FROM quiz_sessions WHERE id = %s",
        [session_id],
        fetch="one",
    )


def complete_quiz_session(session_id: int, score: int, total_questions: int) -> dict[str, Any] | None:
    """Mark a session completed with its final score."""
    return _execute(
        "UPDATE quiz_sessions SET status = 'completed', score = %s, total_questions = %s, "
        f"completed_at = NOW() WHERE id = %s RETURNING {_SESSION_COLUMNS}",
        [score, total_questions, session_id],
        fetch="one",
    )


# --------------- questions ---------------

def insert_questions(session_id: int, questions: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Bulk-insert generated questions for a session, in order."""
    if not questions:
        return []
    rows = [
        (
            session_id,
            q["question_text"],
            q["question_type"],
            Json(q["options"]),
            q["correct_answer"],
            q["difficulty"],
        )
        for q in questions
    ]
    conn = get_connection()
    try:
        with conn.cursor(cursor_factory=RealDictCursor) as cur:
            inserted = execute_values(
                cur,
                "INSERT INTO questions "
                "(session_id, question_text, question_type, options, correct_answer, difficulty) "
                f"VALUES %s RETURNING {_QUESTION_COLUMNS}",
                rows,
                fetch=True,
            )
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        put_connection(conn)
    return sorted(inserted, key=lambda row: row["id"])


def get_questions(session_id: int) -> list[dict[str, Any]]:
    return _execute(
        f"SELECT {_QUESTION_COLUMNS} FROM questions WHERE session_id = %s ORDER BY created_at, id",
        [session_id],
        fetch="all",
    )


def get_question(question_id: int) -> dict[str, Any] | None:
    return _execute(
        f"SELECT {_QUESTION_COLUMNS} FROM questions WHERE id = %s",
        [question_id],
        fetch="one",
    )


def record_answer(question_id: int, user_answer: str, is_correct: bool) -> dict[str, Any] | None:
    """Store the user's answer and whether it was correct."""
    return _execute(
        "UPDATE questions SET user_answer = %s, is_correct = %s "
        f"WHERE id = %s RETURNING {_QUESTION_COLUMNS}",
        [user_answer, is_correct, question_id],
        fetch="one",
    )
