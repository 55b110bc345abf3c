"""Port interface for AI-based query classification."""

from abc import ABC, abstractmethod


class ClassifierPort(ABC):
    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when the upstream credential is present."""
        ...

    @abstractmethod
    async def complete(self, query_text: str) -> str:
        """Send the classification prompt upstream and return the model's text.

        Every upstream failure is raised as a ClassificationError subclass.
        """
        ...
