"""Exception handlers mapping domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from prp.adapter.error import ProviderError
from prp.domain.error import (
    AuthenticationFailedError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotAuthenticatedError,
    NotFoundError,
    TransientStoreError,
    ValidationError,
)

# Checked in order, so subclasses must precede their bases
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, 422),
    (AuthenticationFailedError, 401),
    (NotAuthenticatedError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (TransientStoreError, 503),
]


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logfire.error("Domain error", path=request.url.path, error=str(exc))
    else:
        logfire.info(
            "Request rejected",
            path=request.url.path,
            error_type=type(exc).__name__,
            status_code=code,
        )
    return JSONResponse(
        status_code=code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    logfire.error("Identity provider error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Identity provider unavailable", "error": type(exc).__name__},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(ProviderError, provider_error_handler)
