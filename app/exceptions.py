# =============================================================================
# app/exceptions.py - Exception Handlers
# =============================================================================
# Maps the core's ChirpyError kinds onto HTTP responses.
#
#   validation    -> 400
#   auth          -> 401 (+ WWW-Authenticate: Bearer or ApiKey)
#   not_found     -> 404
#   storage       -> 500
#   serialization -> 500
# =============================================================================

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.utils import AuthError, ChirpyError, ErrorKind

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTH: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORAGE: 500,
    ErrorKind.SERIALIZATION: 500,
}


def status_for(exc: ChirpyError) -> int:
    """HTTP status code for a core error."""
    return STATUS_BY_KIND.get(exc.kind, 500)


async def chirpy_exception_handler(
    request: Request,
    exc: ChirpyError
) -> JSONResponse:
    """
    Convert ChirpyError to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - kind: Error category
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    status_code = status_for(exc)
    headers = None

    if isinstance(exc, AuthError):
        headers = {"WWW-Authenticate": exc.scheme}
    elif status_code >= 500:
        # Storage layer already logged the cause; record which request hit it
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(
            status_code=status_code,
            content={"detail": exc.message, "code": exc.code, "kind": exc.kind.value},
        )

    return JSONResponse(
        status_code=status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle anything that is not a ChirpyError."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )
