"""HTTP routes for authentication."""

import ipaddress

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from api.base import success_response, error_response, ErrorCodes
from auth.config import AuthConfig
from auth.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from auth.service import AuthService
from auth.types import AuthenticatedUser, SignInRequest, SignUpRequest


def _get_client_ip(request: Request) -> str | None:
    """Extract valid IP address from request, or None if invalid."""
    if not request.client:
        return None
    host = request.client.host
    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        return None


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _user_payload(result: AuthenticatedUser) -> dict:
    return {
        "user": {
            "id": result.user.id,
            "email": result.user.email,
            "name": result.user.name,
        }
    }


def create_auth_router(auth_service: AuthService, config: AuthConfig) -> APIRouter:
    """Create auth router with injected service."""
    router = APIRouter(tags=["auth"])

    def set_session_cookie(response: Response, result: AuthenticatedUser) -> None:
        response.set_cookie(
            key=config.session_cookie_name,
            value=result.session.token,
            httponly=True,
            secure=config.session_cookie_secure,
            samesite=config.session_cookie_samesite,
            max_age=auth_service.cookie_max_age(result.session),
        )

    @router.post("/sign-in")
    async def sign_in(request: Request, response: Response, body: SignInRequest):
        """Sign in with email and password.

        Sets the session cookie on success.
        """
        try:
            result = auth_service.sign_in(
                email=body.email,
                password=body.password,
                ip_address=_get_client_ip(request),
                user_agent=request.headers.get("User-Agent"),
            )
        except InvalidCredentialsError:
            return JSONResponse(
                status_code=401,
                content=error_response(
                    ErrorCodes.INVALID_CREDENTIALS,
                    "Invalid email or password",
                    _request_id(request),
                ).model_dump(mode="json"),
            )

        set_session_cookie(response, result)
        return success_response(_user_payload(result), _request_id(request))

    @router.post("/sign-up")
    async def sign_up(request: Request, response: Response, body: SignUpRequest):
        """Create an account and sign in to it.

        Sets the session cookie on success.
        """
        try:
            result = auth_service.sign_up(
                name=body.name,
                email=body.email,
                password=body.password,
                ip_address=_get_client_ip(request),
                user_agent=request.headers.get("User-Agent"),
            )
        except UserAlreadyExistsError:
            return JSONResponse(
                status_code=409,
                content=error_response(
                    ErrorCodes.ALREADY_EXISTS,
                    "An account with this email already exists",
                    _request_id(request),
                ).model_dump(mode="json"),
            )

        set_session_cookie(response, result)
        return success_response(_user_payload(result), _request_id(request))

    @router.post("/sign-out")
    async def sign_out(request: Request, response: Response):
        """Sign out - revoke session and clear cookie."""
        session_token = request.cookies.get(config.session_cookie_name)

        if session_token:
            auth_service.sign_out(
                session_token=session_token,
                ip_address=_get_client_ip(request),
            )

        response.delete_cookie(key=config.session_cookie_name)

        return success_response({"message": "Signed out successfully"}, _request_id(request))

    @router.get("/me")
    async def get_current_user(request: Request):
        """Get current authenticated user.

        Requires authentication (middleware sets request.state.user).
        """
        user = getattr(request.state, "user", None)
        if user is None:
            return JSONResponse(
                status_code=401,
                content=error_response(
                    ErrorCodes.NOT_AUTHENTICATED,
                    "Authentication required",
                    _request_id(request),
                ).model_dump(mode="json"),
            )

        return success_response({
            "user": user.model_dump(mode="json"),
        }, _request_id(request))

    return router
