"""Translate matching errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from volunteer_match.domain.errors import (
    AlreadyDecided,
    CapacityBelowParticipants,
    DuplicateApplication,
    InvalidTransition,
    MatchingError,
    NotAuthorized,
    NotFound,
    OpportunityFull,
    OpportunityUnavailable,
    StoreUnavailable,
)

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 1

_STATUS_BY_ERROR: dict[type[MatchingError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    NotAuthorized: status.HTTP_403_FORBIDDEN,
    DuplicateApplication: status.HTTP_409_CONFLICT,
    AlreadyDecided: status.HTTP_409_CONFLICT,
    OpportunityFull: status.HTTP_409_CONFLICT,
    OpportunityUnavailable: status.HTTP_409_CONFLICT,
    InvalidTransition: status.HTTP_409_CONFLICT,
    CapacityBelowParticipants: status.HTTP_409_CONFLICT,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for_error(exc: MatchingError) -> int:
    for error_type in type(exc).__mro__:
        code = _STATUS_BY_ERROR.get(error_type)
        if code is not None:
            return code
    return status.HTTP_400_BAD_REQUEST


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(MatchingError)
    async def matching_error_handler(request: Request, exc: MatchingError):  # type: ignore[override]
        status_code = status_for_error(exc)
        headers = None
        if exc.retryable:
            headers = {"Retry-After": str(RETRY_AFTER_SECONDS)}
            logger.warning("Store unavailable while serving %s", request.url.path)
        return JSONResponse(
            status_code=status_code,
            content={"detail": exc.detail, "code": exc.code},
            headers=headers,
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):  # type: ignore[override]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc), "code": "invalid_input"},
        )


__all__ = ["install_error_handlers", "status_for_error"]
