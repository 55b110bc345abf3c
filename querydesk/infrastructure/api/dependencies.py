"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from querydesk.adapters.llm.gateway_adapter import GatewayClassifierAdapter
from querydesk.adapters.persistence.database import get_session
from querydesk.adapters.persistence.repositories import SqlAgentRepository, SqlQueryRepository
from querydesk.application.ports.classifier_port import ClassifierPort
from querydesk.application.use_cases.classify_query import ClassifyQueryUseCase
from querydesk.application.use_cases.submit_query import SubmitQueryUseCase
from querydesk.application.use_cases.update_query import UpdateQueryUseCase
from querydesk.config import settings


# Stateless singleton; the key is read from settings once, here.
_classifier = GatewayClassifierAdapter(
    api_key=settings.ai_gateway_api_key,
    base_url=settings.ai_gateway_url,
    model=settings.ai_model,
    temperature=settings.ai_temperature,
)


def get_classifier() -> ClassifierPort:
    return _classifier


def get_query_repo(session: AsyncSession = Depends(get_session)) -> SqlQueryRepository:
    return SqlQueryRepository(session)


def get_agent_repo(session: AsyncSession = Depends(get_session)) -> SqlAgentRepository:
    return SqlAgentRepository(session)


def get_classify_query_uc(
    classifier: ClassifierPort = Depends(get_classifier),
) -> ClassifyQueryUseCase:
    # One instance per request: the use case tracks its own stage.
    return ClassifyQueryUseCase(classifier=classifier)


def get_submit_query_uc(
    classify_uc: ClassifyQueryUseCase = Depends(get_classify_query_uc),
    query_repo: SqlQueryRepository = Depends(get_query_repo),
) -> SubmitQueryUseCase:
    return SubmitQueryUseCase(classify=classify_uc, query_repo=query_repo)


def get_update_query_uc(
    query_repo: SqlQueryRepository = Depends(get_query_repo),
    agent_repo: SqlAgentRepository = Depends(get_agent_repo),
) -> UpdateQueryUseCase:
    return UpdateQueryUseCase(query_repo=query_repo, agent_repo=agent_repo)
