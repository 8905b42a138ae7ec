"""Security middleware for FastAPI - session validation and request user."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from auth.session import SessionManager
from auth.exceptions import SessionExpiredError
from api.base import error_response, ErrorCodes
from clients.appwrite_client import RemoteServiceError

logger = logging.getLogger(__name__)


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware that validates the session and attaches its user.

    For protected routes:
    1. Extracts session token from the session cookie
    2. Validates session via SessionManager
    3. Sets request.state.user, which routes hand to services explicitly

    Public paths bypass authentication entirely.
    """

    PUBLIC_PATHS = [
        "/auth/sign-in",
        "/auth/sign-up",
        "/auth/sign-out",
        "/health",
        "/docs",
        "/openapi.json",
    ]

    def __init__(self, app, session_manager: SessionManager, cookie_name: str = "session_token"):
        super().__init__(app)
        self._session_manager = session_manager
        self._cookie_name = cookie_name

    def _is_public_path(self, path: str) -> bool:
        """Check if path is in public paths list."""
        for public_path in self.PUBLIC_PATHS:
            if path == public_path or path.startswith(public_path):
                return True
        return False

    async def dispatch(self, request: Request, call_next):
        """Process request through middleware."""
        path = request.url.path

        # Skip auth for public paths
        if self._is_public_path(path):
            return await call_next(request)

        request_id = getattr(request.state, "request_id", None)
        session_token = request.cookies.get(self._cookie_name)

        if not session_token:
            return JSONResponse(
                status_code=401,
                content=error_response(
                    ErrorCodes.NOT_AUTHENTICATED,
                    "Authentication required",
                    request_id,
                ).model_dump(mode="json"),
            )

        try:
            user = self._session_manager.validate_session(session_token)
        except SessionExpiredError:
            return JSONResponse(
                status_code=401,
                content=error_response(
                    ErrorCodes.SESSION_EXPIRED,
                    "Session has expired",
                    request_id,
                ).model_dump(mode="json"),
            )
        except RemoteServiceError as e:
            logger.error(f"Session validation failed: {e}")
            return JSONResponse(
                status_code=502,
                content=error_response(
                    ErrorCodes.SERVICE_UNAVAILABLE,
                    "Authentication service unavailable",
                    request_id,
                ).model_dump(mode="json"),
            )

        request.state.user = user
        return await call_next(request)
