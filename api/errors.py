"""Global exception handlers for FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.responses import JSONResponse

from api.base import error_response, ErrorCodes
from auth.exceptions import AuthError, SessionExpiredError
from clients.appwrite_client import RemoteServiceError
from core.lifecycle import InvalidStatusTransitionError
from core.totals import InvalidInputError

logger = logging.getLogger(__name__)


def _error(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status_code,
        content=error_response(code, message, request_id).model_dump(mode="json"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        return _error(request, 400, ErrorCodes.VALIDATION_ERROR, str(exc))

    @app.exception_handler(InvalidStatusTransitionError)
    async def status_transition_handler(request: Request, exc: InvalidStatusTransitionError):
        return _error(request, 400, ErrorCodes.INVALID_STATUS_TRANSITION, str(exc))

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        message = str(exc)
        if "not found" in message.lower():
            return _error(request, 404, ErrorCodes.NOT_FOUND, message)
        return _error(request, 400, ErrorCodes.INVALID_REQUEST, message)

    @app.exception_handler(ValidationError)
    async def model_validation_handler(request: Request, exc: ValidationError):
        return _error(
            request, 422, ErrorCodes.VALIDATION_ERROR, str(exc.errors(include_url=False))
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error(request, 422, ErrorCodes.VALIDATION_ERROR, str(exc.errors()))

    @app.exception_handler(RemoteServiceError)
    async def remote_service_handler(request: Request, exc: RemoteServiceError):
        logger.error(
            f"Remote service failure on {request.method} {request.url.path}: "
            f"{exc} (status={exc.status_code})"
        )
        return _error(
            request,
            502,
            ErrorCodes.SERVICE_UNAVAILABLE,
            "The invoice service is temporarily unavailable. Please try again.",
        )

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        if isinstance(exc, SessionExpiredError):
            return _error(request, 401, ErrorCodes.SESSION_EXPIRED, "Session has expired")
        return _error(request, 401, ErrorCodes.NOT_AUTHENTICATED, "Authentication required")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return _error(request, 500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred")
