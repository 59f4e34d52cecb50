"""Mapping of domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from agora.domain.error import (
    AuthenticationRequiredError,
    ConflictError,
    DomainError,
    InvalidInputError,
    NotAuthorizedError,
    NotFoundError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AuthenticationRequiredError: status.HTTP_401_UNAUTHORIZED,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    ConflictError: status.HTTP_409_CONFLICT,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
}


def error_body(error: DomainError) -> dict[str, str]:
    """Render a domain error as ``{"error", "reason"?, "detail"}``."""
    body = {"error": error.kind, "detail": str(error)}
    if isinstance(error, ConflictError):
        body["reason"] = error.reason.value
    return body


def _handler_for(status_code: int):
    async def handle(request: Request, exc: DomainError) -> JSONResponse:
        logfire.info(
            "Domain error",
            kind=exc.kind,
            path=request.url.path,
            status_code=status_code,
            detail=str(exc),
        )
        return JSONResponse(status_code=status_code, content=error_body(exc))

    return handle


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logfire.exception("Unhandled error", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal", "detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install one handler per domain error class plus a catch-all 500."""
    for error_class, status_code in STATUS_BY_ERROR.items():
        app.add_exception_handler(error_class, _handler_for(status_code))
    app.add_exception_handler(Exception, handle_unexpected)
