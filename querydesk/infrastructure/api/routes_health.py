"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from querydesk.adapters.persistence.database import get_session
from querydesk.application.ports.classifier_port import ClassifierPort
from querydesk.infrastructure.api.dependencies import get_classifier

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    session: AsyncSession = Depends(get_session),
    classifier: ClassifierPort = Depends(get_classifier),
):
    """Check database connectivity and whether the AI gateway key is set."""
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {e}"

    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "classifier": "configured" if classifier.is_configured else "not_configured",
        "service": "QueryDesk - query intake and triage",
    }
