"""Quiz generation prompt templates."""

from __future__ import annotations

from app.schemas.quiz import GenerationRequest

QUIZ_GENERATE_SYSTEM_PROMPT = """\
You are an expert quiz generator. Generate {question_count} quiz questions based on the provided content.

Skill level: {skill_level}

For each question, you must provide:
1. A clear question text
2. Question type: either "multiple-choice" or "true-false"
3. For multiple-choice: exactly 4 options (A, B, C, D)
4. The correct answer
5. Difficulty classification: Easy, Medium, or Hard

Difficulty guidelines:
- Easy: Basic recall and simple concepts
- Medium: Application and understanding
- Hard: Analysis and critical thinking

Return ONLY a valid JSON array with this exact structure:
[
  {{
    "question": "Question text here?",
    "type": "multiple-choice",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correct": "Option A",
    "difficulty": "Easy"
  }},
  {{
    "question": "True or false statement?",
    "type": "true-false",
    "options": ["True", "False"],
    "correct": "True",
    "difficulty": "Medium"
  }}
]

Important: Return ONLY the JSON array, no additional text or formatting.
"""

QUIZ_GENERATE_TOPIC_PROMPT = "Generate quiz questions about {topic}"


def build_prompt(request: GenerationRequest) -> tuple[str, str]:
    """Return ``(system_prompt, user_content)`` for a generation request.

    Pasted source text wins over the topic; without it the user turn is a
    short instruction naming the topic.
    """
    system_prompt = QUIZ_GENERATE_SYSTEM_PROMPT.format(
        question_count=request.question_count,
        skill_level=request.skill_level,
    )
    source_text = (request.source_text or "").strip()
    if source_text:
        return system_prompt, request.source_text
    return system_prompt, QUIZ_GENERATE_TOPIC_PROMPT.format(topic=request.topic or "")
