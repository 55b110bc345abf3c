"""Classification errors — one type per terminal failure of a classify call.

Every error carries the HTTP status and the user-facing message the
classifier endpoint answers with. None of them is retried.
"""

from __future__ import annotations

from querydesk.domain.value_objects.enums import ClassificationStage


class ClassificationError(Exception):
    """Base class for all classify failures."""

    status_code: int = 500
    message: str = "Unknown error"

    def __init__(
        self,
        message: str | None = None,
        stage: ClassificationStage | None = None,
    ):
        self.message = message or self.message
        self.stage = stage
        super().__init__(self.message)

    def to_payload(self) -> dict:
        return {"error": self.message}


class InvalidInput(ClassificationError):
    status_code = 400
    message = "Query text is required"


class ServiceMisconfigured(ClassificationError):
    status_code = 500
    message = "AI service not configured"


class UpstreamUnavailable(ClassificationError):
    status_code = 500
    message = "AI service unavailable"


class RateLimited(ClassificationError):
    status_code = 429
    message = "Rate limit exceeded. Please try again later."


class PaymentRequired(ClassificationError):
    status_code = 402
    message = "AI service payment required. Please add credits."


class ClassificationFailed(ClassificationError):
    status_code = 500
    message = "AI classification failed"


class InvalidUpstreamResponse(ClassificationError):
    status_code = 500
    message = "Invalid AI response"


class MalformedClassification(ClassificationError):
    status_code = 500
    message = "Failed to parse classification result"


class Unknown(ClassificationError):
    """Anything raised during a classify call that is not one of the above."""

    status_code = 500
    message = "Unknown error"
