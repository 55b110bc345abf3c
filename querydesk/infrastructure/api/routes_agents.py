"""Agent endpoints — staff eligible for assignment."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from querydesk.application.ports.agent_repo import AgentRepository
from querydesk.infrastructure.api.dependencies import get_agent_repo

router = APIRouter(prefix="/agents", tags=["agents"])


@router.get("")
async def list_agents(agent_repo: AgentRepository = Depends(get_agent_repo)):
    """All agents, ordered by name."""
    agents = await agent_repo.get_all()
    return {
        "total": len(agents),
        "agents": [{"id": a.id, "name": a.name, "email": a.email} for a in agents],
    }
