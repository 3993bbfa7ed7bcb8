"""FastAPI application factory."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.v1 import api_router
from core import settings
from db.session import async_engine, init_db
from services import SystemClock

logger = logging.getLogger(__name__)
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> None:
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    if settings.auto_create_schema:
        await init_db()
        logger.info("Database schema created", extra={"app_env": settings.app_env})
    yield
    await async_engine.dispose()


def create_app() -> FastAPI:
    """Build the API application with its shared clock and write lock."""
    configure_logging()
    application = FastAPI(title="Post Store", lifespan=lifespan)
    application.state.clock = SystemClock()
    application.state.post_write_lock = asyncio.Lock()
    application.include_router(api_router)

    @application.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return application
