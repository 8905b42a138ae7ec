"""Authentication and authorization modules."""

from auth.exceptions import (
    AuthError,
    InvalidCredentialsError,
    UserAlreadyExistsError,
    SessionExpiredError,
)
from auth.types import (
    User,
    Session,
    SignInRequest,
    SignUpRequest,
    AuthenticatedUser,
)
from auth.config import AuthConfig
from auth.security_logger import SecurityLogger, SecurityEvent
from auth.session import SessionManager
from auth.service import AuthService
from auth.security_middleware import AuthMiddleware
from auth.api import create_auth_router
