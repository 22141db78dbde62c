"""Mapping of domain errors to JSON error responses."""

import functools
from typing import Awaitable, Callable

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from tokobook.domain.errors import ConflictError, DomainError, NotFoundError
from tokobook.logging import get_logger

LOG = get_logger("api")

Endpoint = Callable[[Request], Awaitable[Response]]


def status_for(error: DomainError) -> int:
    """Return the HTTP status code for a domain error."""
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ConflictError):
        return 409
    return 400


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def json_endpoint(handler: Endpoint) -> Endpoint:
    """Wrap an endpoint so every failure becomes a ``{"error": ...}`` body.

    Domain errors keep their message; anything else is logged with its
    traceback and reported as a 500.
    """

    @functools.wraps(handler)
    async def wrapper(request: Request) -> Response:
        try:
            return await handler(request)
        except DomainError as e:
            return error_response(str(e), status_for(e))
        except Exception as e:
            LOG.exception("Unhandled error on %s %s", request.method, request.url.path)
            return error_response(f"Internal server error: {e}", 500)

    return wrapper
