"""Agent entity — a staff member who can be assigned queries."""

from dataclasses import dataclass


@dataclass
class Agent:
    id: str | None
    name: str
    email: str
