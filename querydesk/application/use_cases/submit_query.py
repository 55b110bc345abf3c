"""SubmitQueryUseCase — classify a new query text, then persist it."""

from __future__ import annotations

import logging
from typing import Any

from querydesk.application.ports.query_repo import QueryRepository
from querydesk.application.use_cases.classify_query import ClassifyQueryUseCase
from querydesk.domain.entities.classification import ClassificationResult
from querydesk.domain.entities.query import Query
from querydesk.domain.errors import MalformedClassification
from querydesk.domain.value_objects.enums import ClassificationStage

logger = logging.getLogger(__name__)


class SubmitQueryUseCase:
    """Classification first; the query is only inserted if it succeeds."""

    def __init__(self, classify: ClassifyQueryUseCase, query_repo: QueryRepository):
        self._classify = classify
        self._queries = query_repo

    async def execute(self, body: Any) -> Query:
        """Classify ``body["queryText"]`` and store the new query.

        Raises:
            ClassificationError: from the classify step; nothing is stored.
        """
        payload = await self._classify.execute(body)
        if not isinstance(payload, dict):
            logger.error("Classification is not a JSON object: %r", payload)
            raise MalformedClassification(stage=ClassificationStage.PARSING_RESPONSE)

        result = ClassificationResult.from_payload(payload)
        query = Query.from_classification(body["queryText"], result)
        saved = await self._queries.save(query)
        logger.info(
            "Query %s submitted (category=%s, priority=%s, sentiment=%s)",
            saved.id, saved.category, saved.priority, saved.sentiment,
        )
        return saved
