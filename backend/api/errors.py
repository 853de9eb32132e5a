"""
Exception handlers: pipeline errors -> JSON {error} responses.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from services.explainer.errors import (
    CodeExplainerError,
    ValidationError,
    ServiceUnavailableError,
)


logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request data. Please check your code input and try again."
ANALYSIS_FAILED_MESSAGE = "Failed to analyze code. Please try again."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


def _error(status_code: int, message: str, field: str = None) -> JSONResponse:
    body = {"error": message}
    if field:
        body["field"] = field
    return JSONResponse(status_code=status_code, content=body)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc.message)
    return _error(400, exc.message, field=exc.field or None)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Body missing, not JSON, or fields of the wrong type
    logger.info("Invalid request body for %s: %s", request.url.path, exc.errors())
    return _error(400, INVALID_REQUEST_MESSAGE)


async def service_unavailable_handler(
    request: Request, exc: ServiceUnavailableError
) -> JSONResponse:
    logger.error("Error in %s: provider unavailable", request.url.path)
    return _error(503, ServiceUnavailableError.message)


async def explainer_error_handler(request: Request, exc: CodeExplainerError) -> JSONResponse:
    logger.error("Error in %s: %s", request.url.path, exc)
    return _error(500, ANALYSIS_FAILED_MESSAGE)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error in %s", request.url.path)
    return _error(500, UNEXPECTED_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install handlers; the most specific class wins.

    Other exceptions are answered by unexpected_error_handler from the
    request-log middleware in main.py.
    """
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ServiceUnavailableError, service_unavailable_handler)
    app.add_exception_handler(CodeExplainerError, explainer_error_handler)
