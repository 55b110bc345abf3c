"""UpdateQueryUseCase — staff changes to a query's status or assignee."""

from __future__ import annotations

import logging

from querydesk.application.ports.agent_repo import AgentRepository
from querydesk.application.ports.query_repo import QueryRepository
from querydesk.domain.entities.query import Query
from querydesk.domain.value_objects.enums import QueryStatus

logger = logging.getLogger(__name__)

# Sentinel: "assigned_agent_id not part of this update" (None means unassign)
UNCHANGED = object()


class QueryNotFound(LookupError):
    pass


class AgentNotFound(LookupError):
    pass


class UpdateQueryUseCase:
    def __init__(self, query_repo: QueryRepository, agent_repo: AgentRepository):
        self._queries = query_repo
        self._agents = agent_repo

    async def execute(
        self,
        query_id: str,
        status: QueryStatus | None = None,
        assigned_agent_id: str | None | object = UNCHANGED,
    ) -> Query:
        """Apply a partial update and return the stored query.

        Raises:
            QueryNotFound: no query with *query_id*.
            AgentNotFound: *assigned_agent_id* names no agent.
        """
        query = await self._queries.get_by_id(query_id)
        if query is None:
            raise QueryNotFound(query_id)

        if assigned_agent_id is not UNCHANGED and assigned_agent_id is not None:
            if await self._agents.get_by_id(assigned_agent_id) is None:
                raise AgentNotFound(assigned_agent_id)

        if status is not None:
            query.status = QueryStatus(status)
        if assigned_agent_id is not UNCHANGED:
            query.assigned_agent_id = assigned_agent_id

        updated = await self._queries.update(query)
        logger.info(
            "Query %s updated (status=%s, agent=%s)",
            query_id, updated.status.value, updated.assigned_agent_id,
        )
        return updated
