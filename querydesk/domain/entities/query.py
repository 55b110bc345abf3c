"""Query entity — a user-submitted text item awaiting triage."""

from dataclasses import dataclass, field
from datetime import datetime

from querydesk.domain.entities.classification import ClassificationResult
from querydesk.domain.value_objects.enums import QueryStatus


@dataclass
class Query:
    id: str | None
    text: str
    category: str | None
    priority: str | None
    sentiment: str | None
    key_phrases: list[str] = field(default_factory=list)
    status: QueryStatus = QueryStatus.NEW
    assigned_agent_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_classification(cls, text: str, result: ClassificationResult) -> "Query":
        return cls(
            id=None,
            text=text,
            category=result.category,
            priority=result.priority,
            sentiment=result.sentiment,
            key_phrases=list(result.key_phrases),
        )
