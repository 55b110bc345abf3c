"""Analytics endpoints — dashboard summary."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from querydesk.application.ports.query_repo import QueryRepository
from querydesk.domain.policies.analytics import summarize_queries
from querydesk.infrastructure.api.dependencies import get_query_repo

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/summary")
async def analytics_summary(query_repo: QueryRepository = Depends(get_query_repo)):
    """Counts by category, priority and status."""
    queries = await query_repo.list_recent()
    return summarize_queries(queries)
