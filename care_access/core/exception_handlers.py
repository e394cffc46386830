"""Maps CareAccessException to JSON error responses.

Every error the read-only API produces itself (bad tenant header, unknown
operation kind, missing permission row, store down) is a CareAccessException;
request-shape errors keep FastAPI's default 422 response.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from care_access.domain.exceptions import CareAccessException
from care_access.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_STATUS_BY_ERROR_CODE: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "PERMISSION_DENIED": 403,
    "PERMISSION_NOT_FOUND": 404,
    "RESOURCE_NOT_FOUND": 404,
    "STORE_UNAVAILABLE": 503,
    "SERVICE_UNAVAILABLE": 503,
}


def _status_for(exc: CareAccessException) -> int:
    """HTTP status for a domain error; unknown codes are client errors."""
    return _STATUS_BY_ERROR_CODE.get(exc.error_code, 400)


async def _care_access_error(request: Request, exc: CareAccessException) -> JSONResponse:
    status = _status_for(exc)
    if status >= 500:
        logger.warning("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the CareAccessException handler (covers all subclasses)."""
    app.add_exception_handler(CareAccessException, _care_access_error)
