"""Query endpoints — submit, list, detail, update."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from querydesk.adapters.persistence.database import get_session
from querydesk.application.ports.query_repo import QueryRepository
from querydesk.application.use_cases.submit_query import SubmitQueryUseCase
from querydesk.application.use_cases.update_query import (
    UNCHANGED,
    AgentNotFound,
    QueryNotFound,
    UpdateQueryUseCase,
)
from querydesk.domain.entities.query import Query
from querydesk.domain.errors import ClassificationError
from querydesk.domain.value_objects.enums import QueryStatus
from querydesk.infrastructure.api.dependencies import (
    get_query_repo,
    get_submit_query_uc,
    get_update_query_uc,
)
from querydesk.infrastructure.api.routes_classify import read_json_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/queries", tags=["queries"])


class QueryUpdate(BaseModel):
    status: QueryStatus | None = None
    assigned_agent_id: str | None = None


@router.post("", status_code=201)
async def submit_query(
    request: Request,
    submit_uc: SubmitQueryUseCase = Depends(get_submit_query_uc),
    session: AsyncSession = Depends(get_session),
):
    """Classify a new query and store it. Nothing is stored if classification fails."""
    body = await read_json_body(request)
    try:
        query = await submit_uc.execute(body)
    except ClassificationError as e:
        logger.warning("Query not submitted: %s", e.message)
        return JSONResponse(e.to_payload(), status_code=e.status_code)

    await session.commit()
    return serialize_query(query)


@router.get("")
async def list_queries(
    status: str | None = None,
    category: str | None = None,
    priority: str | None = None,
    sentiment: str | None = None,
    assigned_agent_id: str | None = None,
    query_repo: QueryRepository = Depends(get_query_repo),
):
    """List queries newest first, with optional exact-match filters."""
    filters = {
        "status": status,
        "category": category,
        "priority": priority,
        "sentiment": sentiment,
        "assigned_agent_id": assigned_agent_id,
    }
    queries = await query_repo.list_recent({k: v for k, v in filters.items() if v is not None})
    return {
        "total": len(queries),
        "queries": [serialize_query(q) for q in queries],
    }


@router.get("/{query_id}")
async def get_query(query_id: str, query_repo: QueryRepository = Depends(get_query_repo)):
    query = await query_repo.get_by_id(query_id)
    if not query:
        raise HTTPException(status_code=404, detail="Query not found")
    return serialize_query(query)


@router.patch("/{query_id}")
async def update_query(
    query_id: str,
    changes: QueryUpdate,
    update_uc: UpdateQueryUseCase = Depends(get_update_query_uc),
    session: AsyncSession = Depends(get_session),
):
    """Change status and/or assigned agent. ``assigned_agent_id: null`` unassigns."""
    assigned = (
        changes.assigned_agent_id
        if "assigned_agent_id" in changes.model_fields_set
        else UNCHANGED
    )
    try:
        query = await update_uc.execute(query_id, status=changes.status, assigned_agent_id=assigned)
    except QueryNotFound:
        raise HTTPException(status_code=404, detail="Query not found")
    except AgentNotFound:
        raise HTTPException(status_code=404, detail="Agent not found")

    await session.commit()
    return serialize_query(query)


def serialize_query(q: Query) -> dict:
    """Convert a Query entity to an API response dict."""
    return {
        "id": q.id,
        "text": q.text,
        "category": q.category,
        "priority": q.priority,
        "sentiment": q.sentiment,
        "key_phrases": list(q.key_phrases),
        "status": q.status.value,
        "assigned_agent_id": q.assigned_agent_id,
        "created_at": q.created_at.isoformat() if q.created_at else None,
        "updated_at": q.updated_at.isoformat() if q.updated_at else None,
    }
