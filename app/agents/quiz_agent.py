"""Quiz agent — turns a generation request into normalized questions."""

import logging

from app.config import settings
from app.llm.errors import ParseError, QuizGenerationError
from app.llm.gateway_client import ChatCompletionClient
from app.prompts.quiz import build_prompt
from app.schemas.quiz import GeneratedQuestion, GenerationRequest
from app.utils.llm_parse import Extractor, extract_json_array, find_quality_issues, parse_questions

logger = logging.getLogger("uvicorn.error")


class QuestionGenerator:
    """Prompt → model call → parse, with no retries of its own.

    Holds no per-request state, so one instance can serve concurrent requests.
    """

    def __init__(self, client: ChatCompletionClient, extractor: Extractor = extract_json_array) -> None:
        self._client = client
        self._extractor = extractor

    def generate(self, request: GenerationRequest) -> list[GeneratedQuestion]:
        """Generate questions for ``request``.

        Raises
        ------
        ConfigurationError, UpstreamError, ParseError
            Passed through unchanged from the stage that failed.
        """
        logger.info(
            "Generating questions for: topic=%r skill_level=%s count=%s custom_text=%s",
            request.topic,
            request.skill_level,
            request.question_count,
            bool(request.source_text),
        )
        system_prompt, user_content = build_prompt(request)
        try:
            raw = self._client.invoke_model(system_prompt, user_content)
        except QuizGenerationError as exc:
            logger.error("Question generation failed for topic=%r: %s", request.topic, exc)
            raise

        try:
            questions = parse_questions(raw, self._extractor)
        except ParseError:
            logger.error("Failed to parse AI response for topic=%r: %s", request.topic, raw)
            raise

        for index, question in enumerate(questions, start=1):
            issues = find_quality_issues(question)
            if issues:
                logger.warning("Question %s quality issues: %s", index, "; ".join(issues))
        if len(questions) != request.question_count:
            logger.warning(
                "Requested %s questions, model returned %s",
                request.question_count,
                len(questions),
            )
        logger.info("Successfully generated questions: %s", len(questions))
        return questions


def get_question_generator() -> QuestionGenerator:
    """Return a QuestionGenerator wired from settings."""
    client = ChatCompletionClient(
        api_key=settings.ai_gateway_api_key,
        base_url=settings.ai_gateway_url,
        model=settings.ai_gateway_model,
        temperature=settings.ai_temperature,
        timeout=settings.ai_timeout_seconds,
        max_retries=settings.ai_max_retries,
        retry_backoff_seconds=settings.ai_retry_backoff_seconds,
    )
    return QuestionGenerator(client)
