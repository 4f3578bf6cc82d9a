"""Tests for the question generation pipeline end to end."""

import json

import pytest

import app.agents.quiz_agent as quiz_agent
from app.agents.quiz_agent import QuestionGenerator
from app.llm.errors import ConfigurationError, ParseError, UpstreamError, UpstreamErrorKind
from app.llm.gateway_client import ChatCompletionClient
from app.schemas.quiz import GenerationRequest


class _FakeClient:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.calls = []

    def invoke_model(self, system_prompt, user_content):
        self.calls.append((system_prompt, user_content))
        if self._error is not None:
            raise self._error
        return self._response


class _FakeResponse:
    ok = False

    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text


class _StatusSession:
    def __init__(self, status_code):
        self.status_code = status_code

    def post(self, url, json=None, headers=None, timeout=None):
        return _FakeResponse(self.status_code, "slow down")


def _items(count):
    items = []
    for idx in range(count):
        if idx % 2:
            items.append(
                {"question": f"Statement {idx}?", "type": "true-false", "options": ["T", "F"], "correct": "True"}
            )
        else:
            items.append(
                {
                    "question": f"Question {idx}?",
                    "type": "multiple-choice",
                    "options": ["Chlorophyll", "Glucose", "Oxygen", "Water"],
                    "correct": "Chlorophyll",
                    "difficulty": "Medium",
                }
            )
    return items


def test_generate_topic_request_returns_all_questions():
    client = _FakeClient(json.dumps(_items(5)))
    request = GenerationRequest(topic="Photosynthesis", skill_level="Beginner", question_count=5)

    questions = QuestionGenerator(client).generate(request)

    assert len(questions) == 5
    for question in questions:
        assert question.question_text
        assert question.correct_answer in question.options
    system_prompt, user_content = client.calls[0]
    assert user_content == "Generate quiz questions about Photosynthesis"
    assert "Skill level: Beginner" in system_prompt


def test_generate_source_text_request_parses_fenced_json():
    client = _FakeClient("```json\n" + json.dumps(_items(3)) + "\n```")
    request = GenerationRequest(source_text="An article about leaves.", skill_level="Advanced", question_count=3)

    questions = QuestionGenerator(client).generate(request)

    assert len(questions) == 3
    assert client.calls[0][1] == "An article about leaves."


def test_generate_surfaces_rate_limit_without_questions():
    client = ChatCompletionClient("key", "https://gateway.test", "m", session=_StatusSession(429))
    request = GenerationRequest(topic="Photosynthesis")

    with pytest.raises(UpstreamError) as excinfo:
        QuestionGenerator(client).generate(request)

    assert excinfo.value.kind is UpstreamErrorKind.RATE_LIMITED


def test_generate_fails_with_parse_error_for_prose_response():
    client = _FakeClient("Photosynthesis is how plants make food. Hope this helps!")

    with pytest.raises(ParseError):
        QuestionGenerator(client).generate(GenerationRequest(topic="Photosynthesis"))


def test_generate_returns_fewer_questions_than_requested():
    client = _FakeClient(json.dumps(_items(2)))

    questions = QuestionGenerator(client).generate(GenerationRequest(topic="Cells", question_count=5))

    assert len(questions) == 2


def test_generate_uses_injected_extractor():
    client = _FakeClient("structured output")

    questions = QuestionGenerator(client, extractor=lambda _raw: _items(1)).generate(
        GenerationRequest(topic="Cells", question_count=1)
    )

    assert questions[0].question_text == "Question 0?"


def test_get_question_generator_injects_settings(monkeypatch):
    monkeypatch.setattr(quiz_agent.settings, "ai_gateway_api_key", "")

    generator = quiz_agent.get_question_generator()

    with pytest.raises(ConfigurationError):
        generator.generate(GenerationRequest(topic="Cells"))


def test_generate_passes_upstream_error_through_unchanged():
    error = UpstreamError(UpstreamErrorKind.PAYMENT_REQUIRED, 402, "no credits")
    client = _FakeClient(error=error)

    with pytest.raises(UpstreamError) as excinfo:
        QuestionGenerator(client).generate(GenerationRequest(topic="Cells"))

    assert excinfo.value is error
    assert excinfo.value.status_code == 402
