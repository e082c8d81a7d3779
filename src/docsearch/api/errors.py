"""Exception handlers — Map domain errors to the JSON error envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docsearch.core.exceptions import (
    ConflictError,
    NotFoundError,
    ReadOnlyError,
    UnauthorizedError,
    UpstreamUnavailable,
    ValidationError,
)
from docsearch.models.response import ErrorResponse

logger = logging.getLogger(__name__)

UNEXPECTED_MESSAGE = "Something unexpected happened and we've been alerted."


def _error(status: int, **fields: str) -> JSONResponse:
    body = ErrorResponse(status=status, **fields)
    return JSONResponse(status_code=status, content=body.model_dump(exclude_none=True))


def format_request_errors(exc: RequestValidationError) -> list[str]:
    """Render body/query validation errors as ``<field> is missing`` style messages."""
    messages: list[str] = []
    for error in exc.errors():
        loc = error["loc"]
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        field = ".".join(str(part) for part in loc)
        cause = (error.get("ctx") or {}).get("error")
        if error["type"] == "missing":
            messages += [f"{field} is missing", f"{field} is empty"]
        elif error["type"] == "extra_forbidden":
            messages.append(f"{field} is not allowed")
        elif isinstance(cause, ValueError):
            messages.append(str(cause))
        else:
            messages.append(f"{field} is invalid")
    return list(dict.fromkeys(messages))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on ``app``."""

    @app.exception_handler(ValidationError)
    async def _validation(_request: Request, exc: ValidationError) -> JSONResponse:
        return _error(400, developer_message=str(exc))

    @app.exception_handler(RequestValidationError)
    async def _request_validation(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, developer_message=", ".join(format_request_errors(exc)))

    @app.exception_handler(UnauthorizedError)
    async def _unauthorized(_request: Request, exc: UnauthorizedError) -> JSONResponse:
        return _error(400, developer_message=str(exc))

    @app.exception_handler(NotFoundError)
    async def _not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(400, error=str(exc))

    @app.exception_handler(ConflictError)
    async def _conflict(_request: Request, exc: ConflictError) -> JSONResponse:
        return _error(422, developer_message=str(exc))

    @app.exception_handler(ReadOnlyError)
    async def _read_only(_request: Request, exc: ReadOnlyError) -> JSONResponse:
        return _error(503, developer_message=str(exc))

    @app.exception_handler(UpstreamUnavailable)
    async def _upstream(_request: Request, exc: UpstreamUnavailable) -> JSONResponse:
        response = _error(503, developer_message=str(exc))
        response.headers["Retry-After"] = "1"
        return response

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(500, developer_message=UNEXPECTED_MESSAGE)
