"""Chat-completion client for the AI gateway."""

from __future__ import annotations

import logging
import random
import time

import requests

from app.llm.errors import ConfigurationError, UpstreamError, UpstreamErrorKind

logger = logging.getLogger("uvicorn.error")


class ChatCompletionClient:
    """Single request/response calls against an OpenAI-compatible endpoint.

    Parameters
    ----------
    api_key : str
        Bearer credential. An empty key fails every call with
        ``ConfigurationError`` before anything is sent.
    base_url : str
        Full chat-completions URL.
    model : str
        Model identifier sent in the request body.
    temperature : float
        Sampling temperature.
    timeout : float | None
        Per-request timeout in seconds. ``None`` leaves latency bounding to
        the caller.
    max_retries : int
        Extra attempts for ``UNAVAILABLE`` failures only, each after a
        jittered pause of up to ``retry_backoff_seconds``.
    session : requests.Session | None
        HTTP session to send through; a new one is created when omitted.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        temperature: float = 0.7,
        timeout: float | None = None,
        max_retries: int = 0,
        retry_backoff_seconds: float = 1.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self.max_retries = max(0, max_retries)
        self.retry_backoff_seconds = retry_backoff_seconds
        self._session = session or requests.Session()

    def invoke_model(self, system_prompt: str, user_content: str) -> str:
        """Send one chat completion and return the raw completion text."""
        if not self.api_key:
            raise ConfigurationError("AI_GATEWAY_API_KEY is not configured")

        attempt = 0
        while True:
            try:
                return self._post(system_prompt, user_content)
            except UpstreamError as exc:
                if exc.kind is not UpstreamErrorKind.UNAVAILABLE or attempt >= self.max_retries:
                    raise
                attempt += 1
                delay = random.uniform(0, self.retry_backoff_seconds)
                logger.warning(
                    "AI gateway unavailable (status=%s), retry %s/%s in %.2fs",
                    exc.status, attempt, self.max_retries, delay,
                )
                time.sleep(delay)

    def _post(self, system_prompt: str, user_content: str) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            "temperature": self.temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        logger.info("AI gateway call started: model=%s", self.model)
        try:
            resp = self._session.post(
                self.base_url, json=payload, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.error("AI gateway transport error: %s", exc)
            raise UpstreamError(UpstreamErrorKind.UNAVAILABLE) from exc

        if resp.status_code == 429:
            logger.warning("AI gateway rate limited the request")
            raise UpstreamError(UpstreamErrorKind.RATE_LIMITED, resp.status_code, resp.text)
        if resp.status_code == 402:
            logger.warning("AI gateway requires payment")
            raise UpstreamError(UpstreamErrorKind.PAYMENT_REQUIRED, resp.status_code, resp.text)
        if not resp.ok:
            logger.error("AI gateway error: %s %s", resp.status_code, resp.text)
            raise UpstreamError(UpstreamErrorKind.UNAVAILABLE, resp.status_code, resp.text)

        content = _completion_text(resp)
        if content is None:
            logger.error("AI gateway returned no completion text: %s", resp.text)
            raise UpstreamError(UpstreamErrorKind.UNAVAILABLE, resp.status_code, resp.text)
        logger.info("Generated text: %s", content)
        return content


def _completion_text(resp: requests.Response) -> str | None:
    try:
        data = resp.json()
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None
