"""Port interface for agent persistence."""

from abc import ABC, abstractmethod

from querydesk.domain.entities.agent import Agent


class AgentRepository(ABC):
    @abstractmethod
    async def save(self, agent: Agent) -> Agent:
        ...

    @abstractmethod
    async def get_by_id(self, agent_id: str) -> Agent | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Agent | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Agent]:
        ...
