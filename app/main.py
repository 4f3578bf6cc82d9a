"""FastAPI application: question generation and quiz session endpoints."""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.agents import session_agent
from app.agents.quiz_agent import get_question_generator
from app.config import settings
from app.db.connection import close_pool
from app.db.repository_factory import get_repository
from app.llm.errors import QuizGenerationError
from app.schemas.api import (
    ErrorResponse,
    GenerateForSessionRequest,
    GenerateQuestionsRequest,
    GenerateQuestionsResponse,
    SessionResults,
    StartSessionRequest,
    SubmitAnswerRequest,
)
from app.schemas.quiz import GenerationRequest, QuestionRecord, QuizSession, Topic

logger = logging.getLogger("uvicorn.error")
logger.setLevel(settings.log_level.upper())

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    402: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Quiz generator starting (db_backend=%s)", settings.db_backend)
    yield
    if settings.db_backend.lower() != "memory":
        close_pool()


app = FastAPI(title="Quiz Generator", version="0.1.0", lifespan=lifespan)

# Browser clients call the API directly from any origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(QuizGenerationError)
async def quiz_generation_error_handler(request: Request, exc: QuizGenerationError):
    return _error(exc.status_code, exc.message)


@app.exception_handler(session_agent.NotFoundError)
async def not_found_handler(request: Request, exc: session_agent.NotFoundError):
    return _error(404, str(exc))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = [f"{'.'.join(str(p) for p in err['loc'][1:])}: {err['msg']}" for err in exc.errors()]
    return _error(422, "; ".join(messages) or "Invalid request")


@app.post(
    "/generate-questions",
    response_model=GenerateQuestionsResponse,
    responses=_ERROR_RESPONSES,
)
def generate_questions(body: GenerateQuestionsRequest):
    """Generate questions for a topic or pasted text without storing them."""
    topic = (body.topic or "").strip()
    custom_text = (body.custom_text or "").strip()
    if not topic and not custom_text:
        return _error(400, "Please select a topic or provide custom content")

    request = GenerationRequest(
        topic=topic or None,
        source_text=custom_text or None,
        skill_level=body.skill_level,
        question_count=body.num_questions,
    )
    try:
        questions = get_question_generator().generate(request)
    except QuizGenerationError as exc:
        logger.error("Error in generate-questions: %s", exc)
        return _error(exc.status_code, exc.message)
    except Exception:
        logger.exception("Unexpected error in generate-questions")
        return _error(500, "Unknown error occurred")
    return GenerateQuestionsResponse(questions=questions)


@app.get("/topics", response_model=list[Topic])
def list_topics():
    return [Topic.model_validate(row) for row in get_repository().list_topics()]


@app.post("/sessions", response_model=QuizSession, status_code=201, responses=_ERROR_RESPONSES)
def start_session(body: StartSessionRequest):
    try:
        return session_agent.start_session(get_repository(), body)
    except ValueError as exc:
        return _error(400, str(exc))


@app.get("/sessions/{session_id}", response_model=QuizSession, responses=_ERROR_RESPONSES)
def get_session(session_id: int):
    row = get_repository().get_quiz_session(session_id)
    if row is None:
        return _error(404, f"Quiz session {session_id} not found")
    return QuizSession.model_validate(row)


@app.post(
    "/sessions/{session_id}/questions",
    response_model=list[QuestionRecord],
    responses=_ERROR_RESPONSES,
)
def generate_session_questions(session_id: int, body: GenerateForSessionRequest | None = None):
    """Generate and store questions for a session.

    Generation failures come back as ``{"error": ...}`` via the
    ``QuizGenerationError`` handler; the session keeps no partial questions.
    """
    num_questions = body.num_questions if body else settings.default_num_questions
    try:
        return session_agent.generate_for_session(
            get_repository(), get_question_generator(), session_id, num_questions
        )
    except session_agent.SessionStateError as exc:
        return _error(400, str(exc))


@app.post("/questions/{question_id}/answer", response_model=QuestionRecord, responses=_ERROR_RESPONSES)
def submit_answer(question_id: int, body: SubmitAnswerRequest):
    return session_agent.submit_answer(get_repository(), question_id, body.answer)


@app.post("/sessions/{session_id}/complete", response_model=QuizSession, responses=_ERROR_RESPONSES)
def complete_session(session_id: int):
    return session_agent.complete_session(get_repository(), session_id)


@app.get("/sessions/{session_id}/results", response_model=SessionResults, responses=_ERROR_RESPONSES)
def get_results(session_id: int):
    return session_agent.get_results(get_repository(), session_id)


@app.get("/health")
def health():
    return {"ok": True}
