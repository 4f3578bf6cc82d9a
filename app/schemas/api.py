"""Request and response bodies for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.quiz import GeneratedQuestion, QuestionRecord, QuizSession, SkillLevel


class GenerateQuestionsRequest(BaseModel):
    """Body of POST /generate-questions (camelCase keys, as browsers send them)."""

    model_config = ConfigDict(populate_by_name=True)

    topic: str | None = None
    custom_text: str | None = Field(default=None, alias="customText")
    skill_level: SkillLevel = Field(default="Beginner", alias="skillLevel")
    num_questions: int = Field(default=5, gt=0, alias="numQuestions")


class GenerateQuestionsResponse(BaseModel):
    questions: list[GeneratedQuestion]


class ErrorResponse(BaseModel):
    error: str


class StartSessionRequest(BaseModel):
    topic_id: int | None = None
    custom_topic: str | None = None
    custom_text: str | None = None
    skill_level: SkillLevel = "Beginner"


class GenerateForSessionRequest(BaseModel):
    num_questions: int = Field(default=5, gt=0)


class SubmitAnswerRequest(BaseModel):
    answer: str = Field(min_length=1)


class SessionResults(BaseModel):
    session: QuizSession
    questions: list[QuestionRecord]
    percentage: int
