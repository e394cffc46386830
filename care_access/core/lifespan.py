"""Application lifespan: startup and shutdown.

Wiring of infrastructure only (logging, permission cache, DB engine dispose).
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from care_access.core.config import get_settings
from care_access.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, Redis cache (if enabled). Shutdown: cache disconnect,
    SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if settings.redis_enabled:
        from care_access.infrastructure.cache.redis_cache import CacheService

        cache = CacheService(settings=settings)
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None
    logger.info(
        "%s %s started (cache %s)",
        settings.app_name,
        settings.app_version,
        "enabled" if app.state.cache is not None else "disabled",
    )

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        app.state.cache = None
        logger.info("Cache disconnected")

    from care_access.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
