"""Classification result — what the AI gateway assigned to a query text."""

import json
from dataclasses import dataclass, field


def _as_label(value) -> str | None:
    """Keep strings, render JSON scalars as text, drop lists/objects/null."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return json.dumps(value)
    return None


@dataclass
class ClassificationResult:
    # Values are whatever the model returned; they are not checked against
    # Category / Priority / Sentiment.
    category: str | None
    priority: str | None
    sentiment: str | None
    key_phrases: list[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict) -> "ClassificationResult":
        key_phrases = payload.get("keyPhrases")
        if not isinstance(key_phrases, list):
            key_phrases = []
        return cls(
            category=_as_label(payload.get("category")),
            priority=_as_label(payload.get("priority")),
            sentiment=_as_label(payload.get("sentiment")),
            key_phrases=[p for p in key_phrases if isinstance(p, str)],
        )

    def to_payload(self) -> dict:
        return {
            "category": self.category,
            "priority": self.priority,
            "sentiment": self.sentiment,
            "keyPhrases": list(self.key_phrases),
        }
