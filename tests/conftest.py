"""Pytest configuration and shared fixtures."""

import pytest

from fakes import FakeClassifier, InMemoryAgentRepository, InMemoryQueryRepository
from querydesk.domain.entities.agent import Agent


@pytest.fixture
def fake_classifier():
    return FakeClassifier()


@pytest.fixture
def query_repo():
    return InMemoryQueryRepository()


@pytest.fixture
def agent_repo():
    return InMemoryAgentRepository([
        Agent(id="a1", name="Alice Moreno", email="alice@example.com"),
        Agent(id="a2", name="Bob Chen", email="bob@example.com"),
    ])
