"""
Exception handlers shared by every service application.

The services answer errors with short plain-text messages
(``User already exists``, ``Movie not found``) rather than JSON
envelopes.  Handlers registered here render ``HTTPException``
details as ``text/plain``, turn request validation failures into
HTTP 400 and hide unexpected failures behind a generic HTTP 500 after
logging the traceback.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    problems = []
    for error in exc.errors():
        # Drop the leading "body"/"path"/"query" marker from the location
        location = [str(part) for part in error.get("loc", ())[1:]]
        field = ".".join(location) or "body"
        problems.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "Invalid request: " + "; ".join(problems)


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on ``app``."""

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> PlainTextResponse:
        return PlainTextResponse(
            str(exc.detail),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
        message = _describe_validation_error(exc)
        logger.info("%s %s rejected: %s", request.method, request.url.path, message)
        return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return PlainTextResponse(
            "Internal Server Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
