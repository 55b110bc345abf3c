"""QueryDesk — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from querydesk.adapters.persistence.database import create_tables, engine
from querydesk.config import configure_logging
from querydesk.infrastructure.api.routes_agents import router as agents_router
from querydesk.infrastructure.api.routes_analytics import router as analytics_router
from querydesk.infrastructure.api.routes_classify import router as classify_router
from querydesk.infrastructure.api.routes_health import router as health_router
from querydesk.infrastructure.api.routes_queries import router as queries_router

logger = logging.getLogger(__name__)


class DashboardCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that leaves ``/functions/*`` alone.

    The classifier routes answer their own preflight and attach their own
    fixed CORS headers.
    """

    def __init__(self, app, exclude_prefix: str = "/functions", **kwargs):
        super().__init__(app, **kwargs)
        self.exclude_prefix = exclude_prefix

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and scope["path"].startswith(self.exclude_prefix + "/"):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        await create_tables()
        logger.info("Database connection established, tables ready")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="QueryDesk",
        description="Query intake, AI classification and triage",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Dashboard frontend may be served from any origin; /functions sets its own headers
    app.add_middleware(
        DashboardCORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    # Register routers
    app.include_router(classify_router)
    app.include_router(health_router, prefix="/api")
    app.include_router(queries_router, prefix="/api")
    app.include_router(agents_router, prefix="/api")
    app.include_router(analytics_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("querydesk.main:app", host="0.0.0.0", port=8000, log_level="info")
