"""Port interface for query persistence."""

from abc import ABC, abstractmethod

from querydesk.domain.entities.query import Query


class QueryRepository(ABC):
    @abstractmethod
    async def save(self, query: Query) -> Query:
        ...

    @abstractmethod
    async def get_by_id(self, query_id: str) -> Query | None:
        ...

    @abstractmethod
    async def list_recent(self, filters: dict[str, str] | None = None) -> list[Query]:
        """Return queries newest first, optionally filtered by exact field values."""
        ...

    @abstractmethod
    async def update(self, query: Query) -> Query:
        ...
