"""Interactive terminal quiz against the HTTP API."""

from __future__ import annotations

import argparse

import requests

from app.schemas.quiz import SKILL_LEVELS


class QuizApiError(RuntimeError):
    pass


class QuizApi:
    """Thin requests wrapper around the quiz endpoints."""

    def __init__(self, base_url: str, timeout: int, session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _call(self, method: str, path: str, payload: dict | None = None):
        resp = self._session.request(
            method, f"{self.base_url}{path}", json=payload, timeout=self.timeout
        )
        if not resp.ok:
            try:
                message = resp.json().get("error", resp.text)
            except ValueError:
                message = resp.text
            raise QuizApiError(f"Error {resp.status_code}: {message}")
        return resp.json()

    def topics(self) -> list[dict]:
        return self._call("GET", "/topics")

    def start_session(self, payload: dict) -> dict:
        return self._call("POST", "/sessions", payload)

    def generate(self, session_id: int, num_questions: int) -> list[dict]:
        return self._call("POST", f"/sessions/{session_id}/questions", {"num_questions": num_questions})

    def answer(self, question_id: int, answer: str) -> dict:
        return self._call("POST", f"/questions/{question_id}/answer", {"answer": answer})

    def complete(self, session_id: int) -> dict:
        return self._call("POST", f"/sessions/{session_id}/complete")

    def results(self, session_id: int) -> dict:
        return self._call("GET", f"/sessions/{session_id}/results")


def pick_option(options: list[str], raw: str) -> str | None:
    """Resolve a typed answer: a 1-based number, a letter (A-D) or the option text.

    Without options (a malformed generated item) the typed text is the answer.
    """
    raw = raw.strip()
    if not raw:
        return None
    if not options:
        return raw
    if raw.isdigit():
        index = int(raw) - 1
        return options[index] if 0 <= index < len(options) else None
    if len(raw) == 1 and raw.isalpha():
        index = ord(raw.upper()) - ord("A")
        return options[index] if 0 <= index < len(options) else None
    for option in options:
        if option.lower() == raw.lower():
            return option
    return None


def _prompt(text: str) -> str:
    return input(text).strip()


def _select_source(topics: list[dict]) -> dict:
    print("Topics:")
    for idx, topic in enumerate(topics, start=1):
        print(f"  {idx}. {topic['name']}")
    print("Pick a number, type a custom topic, or 'text' to paste content.")
    while True:
        choice = _prompt("topic> ")
        if choice.isdigit() and 1 <= int(choice) <= len(topics):
            return {"topic_id": topics[int(choice) - 1]["id"]}
        if choice.lower() == "text":
            print("Paste your text, end with an empty line.")
            lines = []
            while True:
                line = input()
                if not line:
                    break
                lines.append(line)
            if lines:
                return {"custom_text": "\n".join(lines)}
            continue
        if choice:
            return {"custom_topic": choice}


def _select_skill_level() -> str:
    options = list(SKILL_LEVELS)
    while True:
        level = pick_option(options, _prompt(f"skill level {options} [1]> ") or "1")
        if level:
            return level


def run_quiz(api: QuizApi, num_questions: int) -> int:
    source = _select_source(api.topics())
    source["skill_level"] = _select_skill_level()
    session = api.start_session(source)

    print("Generating questions...")
    questions = api.generate(session["id"], num_questions)
    if not questions:
        print("No questions were generated, please try again.")
        return 1

    for number, question in enumerate(questions, start=1):
        print(f"\n{number}/{len(questions)} [{question['difficulty']}] {question['question_text']}")
        for idx, option in enumerate(question["options"]):
            print(f"  {chr(ord('A') + idx)}) {option}")
        if not question["options"]:
            print("  (no options given, type your answer)")
        answer = None
        while answer is None:
            answer = pick_option(question["options"], _prompt("answer> "))
        result = api.answer(question["id"], answer)
        print("Correct!" if result["is_correct"] else f"Wrong, the answer is: {result['correct_answer']}")

    api.complete(session["id"])
    results = api.results(session["id"])
    done = results["session"]
    print(f"\nScore: {done['score']} out of {done['total_questions']} correct ({results['percentage']}%)")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Interactive quiz CLI")
    parser.add_argument(
        "--url",
        default="http://127.0.0.1:8000",
        help="Quiz API base URL",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=120,
        help="Request timeout in seconds",
    )
    parser.add_argument(
        "--questions",
        type=int,
        default=5,
        help="Number of questions to generate",
    )
    args = parser.parse_args()

    try:
        return run_quiz(QuizApi(args.url, args.timeout), args.questions)
    except QuizApiError as exc:
        print(exc)
        return 1
    except requests.RequestException as exc:
        print(f"Could not reach the quiz API at {args.url}: {exc}")
        return 1
    except (EOFError, KeyboardInterrupt):
        print()
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
