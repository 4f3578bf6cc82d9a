"""Extract and normalize generated questions from raw LLM output."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable

from pydantic import ValidationError

from app.llm.errors import ParseError
from app.schemas.quiz import DIFFICULTIES, TRUE_FALSE_OPTIONS, GeneratedQuestion

logger = logging.getLogger("uvicorn.error")

# Greedy: first "[" to last "]", across newlines.
JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")

Extractor = Callable[[str], Any]


def extract_json_array(raw: str) -> Any:
    """Decode the JSON payload of a model response.

    Tries the greedy bracket span first and falls back to the whole text
    when the response has no ``[...]`` in it.
    """
    match = JSON_ARRAY_RE.search(raw or "")
    candidate = match.group(0) if match else raw
    try:
        return json.loads(candidate)
    except (ValueError, TypeError, RecursionError) as exc:
        # ValueError covers JSONDecodeError and oversized integer literals.
        raise ParseError(raw) from exc


def _normalize_type(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = re.sub(r"[\s_]+", "-", value.strip().lower())
    if cleaned in ("multiple-choice", "true-false"):
        return cleaned
    return None


def _normalize_difficulty(value: Any) -> str:
    if isinstance(value, str):
        for level in DIFFICULTIES:
            if value.strip().lower() == level.lower():
                return level
    return "Medium"


def normalize_question(item: Any) -> GeneratedQuestion | None:
    """Map one model item onto ``GeneratedQuestion``; ``None`` if unusable."""
    if not isinstance(item, dict):
        return None
    question_type = _normalize_type(item.get("type"))
    question_text = item.get("question")
    correct = item.get("correct")
    if question_type is None or not isinstance(question_text, str) or not question_text.strip():
        return None
    if correct is None or isinstance(correct, (dict, list)):
        return None

    if question_type == "true-false":
        options = list(TRUE_FALSE_OPTIONS)
        # Models sometimes answer with a JSON boolean or lowercase text.
        if isinstance(correct, bool):
            correct = "True" if correct else "False"
        elif isinstance(correct, str) and correct.strip().lower() in ("true", "false"):
            correct = correct.strip().capitalize()
    else:
        raw_options = item.get("options")
        options = [str(opt) for opt in raw_options] if isinstance(raw_options, list) else []

    try:
        return GeneratedQuestion(
            question_text=question_text,
            question_type=question_type,
            options=options,
            correct_answer=str(correct),
            difficulty=_normalize_difficulty(item.get("difficulty")),
        )
    except ValidationError:
        return None


def parse_questions(raw: str, extractor: Extractor = extract_json_array) -> list[GeneratedQuestion]:
    """Parse a raw model response into normalized questions.

    Raises ``ParseError`` when no JSON array can be decoded. Individual items
    that cannot be represented are dropped and logged; nothing is invented
    to make up the requested count.
    """
    data = extractor(raw)
    if not isinstance(data, list):
        logger.error("Failed to parse AI response: expected a JSON array, got %s", type(data).__name__)
        raise ParseError(raw)

    questions: list[GeneratedQuestion] = []
    for index, item in enumerate(data):
        question = normalize_question(item)
        if question is None:
            logger.warning("Dropping unusable generated item %s: %r", index, item)
            continue
        questions.append(question)

    if not questions:
        logger.warning("AI response parsed but contained no usable questions: %s", raw)
    return questions


def find_quality_issues(question: GeneratedQuestion) -> list[str]:
    """List contract deviations worth reporting; none of them reject the question."""
    issues = []
    if question.question_type == "multiple-choice":
        if len(question.options) != 4:
            issues.append(f"expected 4 options, got {len(question.options)}")
        if len(set(question.options)) != len(question.options):
            issues.append("options are not distinct")
    if question.correct_answer not in question.options:
        issues.append("correct answer is not one of the options")
    return issues
