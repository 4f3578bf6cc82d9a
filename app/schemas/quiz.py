"""Domain schemas for question generation and quiz sessions."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

SkillLevel = Literal["Beginner", "Intermediate", "Advanced"]
QuestionType = Literal["multiple-choice", "true-false"]
Difficulty = Literal["Easy", "Medium", "Hard"]
SessionStatus = Literal["active", "completed"]

SKILL_LEVELS: tuple[str, ...] = ("Beginner", "Intermediate", "Advanced")
DIFFICULTIES: tuple[str, ...] = ("Easy", "Medium", "Hard")
TRUE_FALSE_OPTIONS: tuple[str, str] = ("True", "False")


class GenerationRequest(BaseModel):
    """One request for a batch of generated questions.

    Either ``topic`` or ``source_text`` should be set; the caller validates
    that before dispatch, the generator only prefers ``source_text`` when both
    are present.
    """

    topic: str | None = None
    source_text: str | None = None
    skill_level: SkillLevel = "Beginner"
    question_count: int = Field(default=5, gt=0)


class GeneratedQuestion(BaseModel):
    question_text: str = Field(min_length=1)
    question_type: QuestionType
    options: list[str]
    correct_answer: str
    difficulty: Difficulty = "Medium"


class Topic(BaseModel):
    id: int
    name: str
    description: str | None = None


class QuizSession(BaseModel):
    id: int
    topic_id: int | None = None
    custom_topic: str | None = None
    custom_text: str | None = None
    skill_level: SkillLevel
    status: SessionStatus = "active"
    score: int | None = None
    total_questions: int | None = None
    created_at: datetime | None = None
    completed_at: datetime | None = None


class QuestionRecord(GeneratedQuestion):
    """A generated question stored against a quiz session."""

    id: int
    session_id: int
    user_answer: str | None = None
    is_correct: bool | None = None
    created_at: datetime | None = None
