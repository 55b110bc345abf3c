"""AnalyticsPolicy — aggregate counts for the dashboard panel."""

from __future__ import annotations

from querydesk.domain.entities.query import Query

UNKNOWN = "Unknown"

# Status names with spaces removed and lowercased → key in status_counts
_STATUS_KEYS: dict[str, str] = {
    "new": "new",
    "inprogress": "in_progress",
    "resolved": "resolved",
    "closed": "closed",
}


def _status_key(status: str) -> str | None:
    return _STATUS_KEYS.get(status.lower().replace(" ", ""))


def _count_by(values: list[str | None]) -> list[dict]:
    """Count values in first-seen order; empty values count as Unknown."""
    counts: dict[str, int] = {}
    for value in values:
        name = value or UNKNOWN
        counts[name] = counts.get(name, 0) + 1
    return [{"name": name, "value": count} for name, count in counts.items()]


def summarize_queries(queries: list[Query]) -> dict:
    """Build the analytics summary over *queries*.

    Returns:
        {total, by_category, by_priority, status_counts}. Statuses that do
        not normalize to one of the four known keys are not counted.
    """
    status_counts = {key: 0 for key in _STATUS_KEYS.values()}
    for q in queries:
        key = _status_key(getattr(q.status, "value", q.status) or "")
        if key is not None:
            status_counts[key] += 1

    return {
        "total": len(queries),
        "by_category": _count_by([q.category for q in queries]),
        "by_priority": _count_by([q.priority for q in queries]),
        "status_counts": status_counts,
    }
