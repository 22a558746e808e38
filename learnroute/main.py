from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from learnroute.api.auth import router as auth_router
from learnroute.api.health import router as health_router
from learnroute.api.metrics_endpoint import router as metrics_router
from learnroute.api.resources import router as resources_router
from learnroute.api.roadmaps import router as roadmaps_router
from learnroute.api.users import router as users_router
from learnroute.core.config import SETTINGS
from learnroute.core.logging import setup_logging
from learnroute.db import engine as db_engine
from learnroute.db.engine import lifespan_db
from learnroute.db.redis import lifespan_redis
from learnroute.middleware.metrics import MetricsMiddleware
from learnroute.middleware.request_context import (
    RequestContextMiddleware,
    install_request_id_filter,
)
from learnroute.repos.registry import memory_repos, pg_repos
from learnroute.services.resource_service import seed_resources_if_empty

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
install_request_id_filter()

logger = logging.getLogger(__name__)


async def _seed_catalog() -> None:
    if db_engine.async_session_factory is None:
        await seed_resources_if_empty(memory_repos.resources)
        return
    async with db_engine.async_session_factory() as session:
        await seed_resources_if_empty(pg_repos(session).resources)
        await session.commit()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    # Nested so teardown runs in reverse order.
    async with lifespan_db():
        async with lifespan_redis():
            await _seed_catalog()
            yield


app = FastAPI(
    title="learnroute",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Last added runs first: RequestContext -> Metrics -> CORS -> route.
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(roadmaps_router)
app.include_router(resources_router)
app.include_router(users_router)

logger.info(
    "learnroute started  env=%s log_level=%s port=%d docs=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    "on" if SETTINGS.is_dev else "off",
)
