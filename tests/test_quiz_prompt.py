"""Tests for quiz prompt construction."""

from app.prompts.quiz import build_prompt
from app.schemas.quiz import GenerationRequest


def test_build_prompt_uses_topic_instruction_without_source_text():
    system_prompt, user_content = build_prompt(
        GenerationRequest(topic="Photosynthesis", skill_level="Beginner", question_count=5)
    )

    assert user_content == "Generate quiz questions about Photosynthesis"
    assert "Generate 5 quiz questions" in system_prompt
    assert "Skill level: Beginner" in system_prompt


def test_build_prompt_prefers_source_text_over_topic():
    _, user_content = build_prompt(
        GenerationRequest(topic="Ignored", source_text="Article body.", skill_level="Advanced", question_count=3)
    )

    assert user_content == "Article body."


def test_build_prompt_falls_back_to_topic_for_blank_source_text():
    _, user_content = build_prompt(GenerationRequest(topic="Rome", source_text="   "))
    assert user_content == "Generate quiz questions about Rome"


def test_build_prompt_encodes_output_contract():
    system_prompt, _ = build_prompt(GenerationRequest(topic="x", skill_level="Intermediate", question_count=2))

    for key in ('"question"', '"type"', '"options"', '"correct"', '"difficulty"'):
        assert key in system_prompt
    assert '"multiple-choice"' in system_prompt and '"true-false"' in system_prompt
    assert "exactly 4 options" in system_prompt
    assert "Easy: Basic recall" in system_prompt
    assert "Medium: Application" in system_prompt
    assert "Hard: Analysis" in system_prompt
    assert "Return ONLY the JSON array" in system_prompt


def test_build_prompt_is_deterministic():
    request = GenerationRequest(topic="Cells", skill_level="Advanced", question_count=4)
    assert build_prompt(request) == build_prompt(request)
