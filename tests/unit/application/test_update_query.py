"""Tests for UpdateQueryUseCase — status changes and (re)assignment."""

import pytest

from querydesk.application.use_cases.update_query import (
    AgentNotFound,
    QueryNotFound,
    UpdateQueryUseCase,
)
from querydesk.domain.entities.query import Query
from querydesk.domain.value_objects.enums import QueryStatus


async def _stored_query(query_repo, agent_id=None) -> Query:
    return await query_repo.save(Query(
        id=None, text="App crashes on login", category="Technical Issue",
        priority="High", sentiment="Negative", key_phrases=["crash"],
        assigned_agent_id=agent_id,
    ))


@pytest.mark.asyncio
async def test_update_status(query_repo, agent_repo):
    q = await _stored_query(query_repo)
    uc = UpdateQueryUseCase(query_repo=query_repo, agent_repo=agent_repo)
    updated = await uc.execute(q.id, status=QueryStatus.IN_PROGRESS)
    assert updated.status == QueryStatus.IN_PROGRESS
    assert updated.assigned_agent_id is None


@pytest.mark.asyncio
async def test_update_refreshes_updated_at(query_repo, agent_repo):
    q = await _stored_query(query_repo)
    before = q.updated_at
    uc = UpdateQueryUseCase(query_repo=query_repo, agent_repo=agent_repo)
    updated = await uc.execute(q.id, status=QueryStatus.RESOLVED)
    assert updated.updated_at > before


@pytest.mark.asyncio
async def test_assign_agent(query_repo, agent_repo):
    q = await _stored_query(query_repo)
    uc = UpdateQueryUseCase(query_repo=query_repo, agent_repo=agent_repo)
    updated = await uc.execute(q.id, assigned_agent_id="a2")
    assert updated.assigned_agent_id == "a2"
    assert updated.status == QueryStatus.NEW


@pytest.mark.asyncio
async def test_unassign_agent(query_repo, agent_repo):
    q = await _stored_query(query_repo, agent_id="a1")
    uc = UpdateQueryUseCase(query_repo=query_repo, agent_repo=agent_repo)
    updated = await uc.execute(q.id, assigned_agent_id=None)
    assert updated.assigned_agent_id is None


@pytest.mark.asyncio
async def test_assignment_untouched_when_not_given(query_repo, agent_repo):
    q = await _stored_query(query_repo, agent_id="a1")
    uc = UpdateQueryUseCase(query_repo=query_repo, agent_repo=agent_repo)
    updated = await uc.execute(q.id, status=QueryStatus.CLOSED)
    assert updated.assigned_agent_id == "a1"


@pytest.mark.asyncio
async def test_unknown_query(query_repo, agent_repo):
    uc = UpdateQueryUseCase(query_repo=query_repo, agent_repo=agent_repo)
    with pytest.raises(QueryNotFound):
        await uc.execute("missing", status=QueryStatus.CLOSED)


@pytest.mark.asyncio
async def test_unknown_agent_leaves_query_unchanged(query_repo, agent_repo):
    q = await _stored_query(query_repo, agent_id="a1")
    uc = UpdateQueryUseCase(query_repo=query_repo, agent_repo=agent_repo)
    with pytest.raises(AgentNotFound):
        await uc.execute(q.id, status=QueryStatus.CLOSED, assigned_agent_id="nobody")
    stored = await query_repo.get_by_id(q.id)
    assert stored.assigned_agent_id == "a1"
    assert stored.status == QueryStatus.NEW
