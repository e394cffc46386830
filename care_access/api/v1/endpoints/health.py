"""Health check endpoints: liveness and readiness (permission store reachable)."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from care_access.core.config import get_settings
from care_access.domain.exceptions import SqlNotConfiguredException
from care_access.infrastructure.persistence.database import session_scope
from care_access.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Permission store unreachable", "model": ReadinessErrorResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 when the SQL permission store answers SELECT 1; 503 otherwise."""
    cache = getattr(request.app.state, "cache", None)
    cache_state = "disabled"
    if cache is not None:
        cache_state = "available" if cache.is_available() else "unavailable"
    try:
        async with session_scope() as session:
            await session.execute(text("SELECT 1"))
    except SqlNotConfiguredException as e:
        return _not_ready(e.message)
    except (SQLAlchemyError, OSError) as e:
        return _not_ready(f"Database unreachable: {e.__class__.__name__}")
    return ReadinessResponse(cache=cache_state)


def _not_ready(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(status="not_ready", message=message).model_dump(),
    )
