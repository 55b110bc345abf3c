"""ClassifyQueryUseCase — validate input, call the AI gateway, parse the reply."""

from __future__ import annotations

import logging
from typing import Any

from querydesk.application.ports.classifier_port import ClassifierPort
from querydesk.domain.errors import (
    ClassificationError,
    InvalidInput,
    InvalidUpstreamResponse,
    ServiceMisconfigured,
    Unknown,
)
from querydesk.domain.policies.reply_parsing import parse_model_reply
from querydesk.domain.value_objects.enums import ClassificationStage

logger = logging.getLogger(__name__)


def extract_query_text(body: Any) -> str:
    """Return ``body["queryText"]`` if it is a non-blank string.

    Raises:
        InvalidInput: for any other body shape.
    """
    if not isinstance(body, dict):
        raise InvalidInput()
    query_text = body.get("queryText")
    if not isinstance(query_text, str) or not query_text.strip():
        raise InvalidInput()
    return query_text


class ClassifyQueryUseCase:
    """Runs one classify call through its stages.

    Stages advance strictly in order:
    validating_input → calling_upstream → parsing_response.
    Each stage fails with exactly one ClassificationError type, tagged with
    the stage it was raised in. Unexpected exceptions become ``Unknown``.
    """

    def __init__(self, classifier: ClassifierPort):
        self._classifier = classifier
        self.stage = ClassificationStage.AWAITING_METHOD

    async def execute(self, body: Any) -> Any:
        """Classify the ``queryText`` in *body*.

        Returns:
            The JSON value parsed from the model's reply, unvalidated.
        """
        try:
            return await self._run(body)
        except ClassificationError as e:
            e.stage = e.stage or self.stage
            raise
        except Exception as e:
            logger.exception("Unexpected error during classification (stage=%s)", self.stage.value)
            raise Unknown(str(e) or None, stage=self.stage) from e

    async def _run(self, body: Any) -> Any:
        self.stage = ClassificationStage.VALIDATING_INPUT
        query_text = extract_query_text(body)

        if not self._classifier.is_configured:
            logger.error("AI gateway API key is not configured")
            raise ServiceMisconfigured()

        self.stage = ClassificationStage.CALLING_UPSTREAM
        logger.info("Calling AI gateway for classification...")
        reply = await self._classifier.complete(query_text)
        if not reply:
            logger.error("No content in AI response")
            raise InvalidUpstreamResponse()

        self.stage = ClassificationStage.PARSING_RESPONSE
        logger.debug("AI response: %s", reply)
        try:
            return parse_model_reply(reply)
        except ClassificationError:
            logger.error("Failed to parse AI response: %s", reply)
            raise
