"""Seed the agents table from a CSV file.

Usage:
    python -m querydesk.tools.seed_db --csv data/agents.csv
    python -m querydesk.tools.seed_db --csv data/agents.csv --drop  # remove existing agents first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, update

from querydesk.adapters.csv_loader.loader import load_agents
from querydesk.adapters.persistence.database import async_session_factory, create_tables
from querydesk.adapters.persistence.models import AgentModel, QueryModel
from querydesk.adapters.persistence.repositories import SqlAgentRepository
from querydesk.application.ports.agent_repo import AgentRepository
from querydesk.config import configure_logging
from querydesk.domain.entities.agent import Agent

logger = logging.getLogger(__name__)


async def seed_agents(rows: list[dict], agent_repo: AgentRepository) -> int:
    """Insert agents whose email is not stored yet. Returns the number inserted."""
    inserted = 0
    seen: set[str] = set()
    for row in rows:
        email = row["email"]
        if email in seen or await agent_repo.get_by_email(email):
            logger.debug("Agent '%s' already exists, skipping", email)
            continue
        seen.add(email)
        await agent_repo.save(Agent(id=None, name=row["name"], email=email))
        inserted += 1
    return inserted


async def seed(csv_path: Path, drop: bool = False) -> int:
    await create_tables()
    async with async_session_factory() as session:
        if drop:
            # Unassign first so the FK does not block the delete
            await session.execute(update(QueryModel).values(assigned_agent_id=None))
            await session.execute(delete(AgentModel))
            logger.info("Dropped existing agents")

        inserted = await seed_agents(load_agents(csv_path), SqlAgentRepository(session))
        await session.commit()

    logger.info("Seed complete: %d agents", inserted)
    return inserted


def main():
    parser = argparse.ArgumentParser(description="Seed QueryDesk agents from a CSV file")
    parser.add_argument("--csv", type=str, required=True, help="Path to the agents CSV")
    parser.add_argument(
        "--drop", action="store_true",
        help="Delete existing agents (and unassign their queries) before seeding",
    )
    args = parser.parse_args()

    configure_logging()
    csv_path = Path(args.csv)
    if not csv_path.exists():
        logger.error("CSV file not found: %s", csv_path)
        sys.exit(1)

    asyncio.run(seed(csv_path, drop=args.drop))


if __name__ == "__main__":
    main()
