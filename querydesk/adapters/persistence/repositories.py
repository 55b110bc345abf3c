"""SQLAlchemy repository implementations."""

from __future__ import annotations

import uuid

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from querydesk.adapters.persistence.models import AgentModel, QueryModel
from querydesk.application.ports.agent_repo import AgentRepository
from querydesk.application.ports.query_repo import QueryRepository
from querydesk.domain.entities.agent import Agent
from querydesk.domain.entities.query import Query
from querydesk.domain.value_objects.enums import QueryStatus

# Columns the dashboard may filter on with an exact match
FILTERABLE_COLUMNS = {
    "status": QueryModel.status,
    "category": QueryModel.category,
    "priority": QueryModel.priority,
    "sentiment": QueryModel.sentiment,
    "assigned_agent_id": QueryModel.assigned_agent_id,
}

# ─── Mappers ─────────────────────────────────────────────────────────


def _to_uuid(value: str | None) -> uuid.UUID | None:
    if value is None:
        return None
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _agent_to_domain(m: AgentModel) -> Agent:
    return Agent(id=str(m.id), name=m.name, email=m.email)


def _query_to_domain(m: QueryModel) -> Query:
    return Query(
        id=str(m.id),
        text=m.text,
        category=m.category,
        priority=m.priority,
        sentiment=m.sentiment,
        key_phrases=list(m.key_phrases or []),
        status=QueryStatus(m.status),
        assigned_agent_id=str(m.assigned_agent_id) if m.assigned_agent_id else None,
        created_at=m.created_at,
        updated_at=m.updated_at,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlQueryRepository(QueryRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, query: Query) -> Query:
        m = QueryModel(
            text=query.text,
            category=query.category,
            priority=query.priority,
            sentiment=query.sentiment,
            key_phrases=list(query.key_phrases),
            status=query.status.value,
            assigned_agent_id=_to_uuid(query.assigned_agent_id),
        )
        self._s.add(m)
        await self._s.flush()
        await self._s.refresh(m)
        return _query_to_domain(m)

    async def get_by_id(self, query_id: str) -> Query | None:
        key = _to_uuid(query_id)
        if key is None:
            return None
        m = await self._s.get(QueryModel, key)
        return _query_to_domain(m) if m else None

    async def list_recent(self, filters: dict[str, str] | None = None) -> list[Query]:
        stmt = select(QueryModel).order_by(QueryModel.created_at.desc())
        for name, value in (filters or {}).items():
            column = FILTERABLE_COLUMNS.get(name)
            if column is None or value is None:
                continue
            if name == "assigned_agent_id":
                value = _to_uuid(value)
                if value is None:
                    return []
            stmt = stmt.where(column == value)
        result = await self._s.execute(stmt)
        return [_query_to_domain(m) for m in result.scalars()]

    async def update(self, query: Query) -> Query:
        key = _to_uuid(query.id)
        await self._s.execute(
            update(QueryModel)
            .where(QueryModel.id == key)
            .values(
                status=query.status.value,
                assigned_agent_id=_to_uuid(query.assigned_agent_id),
            )
        )
        await self._s.flush()
        m = await self._s.get(QueryModel, key, populate_existing=True)
        return _query_to_domain(m) if m else query


class SqlAgentRepository(AgentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, agent: Agent) -> Agent:
        m = AgentModel(name=agent.name, email=agent.email)
        self._s.add(m)
        await self._s.flush()
        agent.id = str(m.id)
        return agent

    async def get_by_id(self, agent_id: str) -> Agent | None:
        key = _to_uuid(agent_id)
        if key is None:
            return None
        m = await self._s.get(AgentModel, key)
        return _agent_to_domain(m) if m else None

    async def get_by_email(self, email: str) -> Agent | None:
        result = await self._s.execute(select(AgentModel).where(AgentModel.email == email))
        m = result.scalar_one_or_none()
        return _agent_to_domain(m) if m else None

    async def get_all(self) -> list[Agent]:
        result = await self._s.execute(select(AgentModel).order_by(AgentModel.name))
        return [_agent_to_domain(m) for m in result.scalars()]
