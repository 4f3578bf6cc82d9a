"""Error taxonomy for the question generation pipeline."""

from __future__ import annotations

from enum import Enum


class QuizGenerationError(Exception):
    """Base class; ``status_code`` and ``message`` are what the API returns."""

    status_code = 500
    message = "Failed to generate questions"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ConfigurationError(QuizGenerationError):
    """A required setting (the gateway credential) is missing."""


class UpstreamErrorKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    PAYMENT_REQUIRED = "payment_required"
    UNAVAILABLE = "unavailable"


_UPSTREAM_STATUS = {
    UpstreamErrorKind.RATE_LIMITED: 429,
    UpstreamErrorKind.PAYMENT_REQUIRED: 402,
    UpstreamErrorKind.UNAVAILABLE: 500,
}

_UPSTREAM_MESSAGES = {
    UpstreamErrorKind.RATE_LIMITED: "Rate limit exceeded. Please try again in a moment.",
    UpstreamErrorKind.PAYMENT_REQUIRED: "Payment required. Please add credits to your workspace.",
    UpstreamErrorKind.UNAVAILABLE: "Failed to generate questions",
}


class UpstreamError(QuizGenerationError):
    """The model gateway refused or failed the request.

    ``status`` and ``body`` hold the upstream HTTP status and response text
    when there was one (transport failures have neither).
    """

    def __init__(
        self,
        kind: UpstreamErrorKind,
        status: int | None = None,
        body: str | None = None,
    ) -> None:
        self.kind = kind
        self.status = status
        self.body = body
        self.status_code = _UPSTREAM_STATUS[kind]
        super().__init__(_UPSTREAM_MESSAGES[kind])


class ParseErrorKind(str, Enum):
    MALFORMED = "malformed"


class ParseError(QuizGenerationError):
    """The model output did not contain a usable JSON array."""

    message = "Invalid response format from AI"

    def __init__(self, raw: str | None = None, kind: ParseErrorKind = ParseErrorKind.MALFORMED) -> None:
        self.kind = kind
        self.raw = raw
        super().__init__()
