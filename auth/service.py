"""Authentication service - orchestrates sign-in, sign-up and sign-out."""

from auth.config import AuthConfig
from auth.exceptions import (
    InvalidCredentialsError,
    SessionExpiredError,
    UserAlreadyExistsError,
)
from auth.security_logger import SecurityLogger, SecurityEvent
from auth.session import SessionManager
from auth.types import AuthenticatedUser, Session, User
from clients.appwrite_client import AppwriteClient, RemoteServiceError


class AuthService:
    """Orchestrates email/password authentication.

    Handles:
    - Sign-in (session creation)
    - Sign-up (account creation followed by sign-in)
    - Sign-out
    - Current user lookup
    """

    def __init__(
        self,
        config: AuthConfig,
        appwrite: AppwriteClient,
        session_manager: SessionManager,
        security_logger: SecurityLogger,
    ):
        self._config = config
        self._appwrite = appwrite
        self._session_manager = session_manager
        self._security_logger = security_logger

    def sign_in(
        self,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuthenticatedUser:
        """Sign in with email and password.

        Raises:
            InvalidCredentialsError: If credentials are rejected.
            RemoteServiceError: If the account service fails.
        """
        email = email.lower().strip()

        try:
            session = self._session_manager.create_session(email, password)
        except InvalidCredentialsError:
            self._security_logger.log(
                SecurityEvent.SIGN_IN_FAILED,
                email=email,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"reason": "invalid_credentials"},
            )
            raise

        user = self._session_manager.validate_session(session.token)

        self._security_logger.log(
            SecurityEvent.SIGN_IN_SUCCEEDED,
            email=user.email,
            user_id=user.id,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self._security_logger.log(
            SecurityEvent.SESSION_CREATED,
            email=user.email,
            user_id=user.id,
            ip_address=ip_address,
            details={"session_id": session.id, "expires_at": session.expires_at.isoformat()},
        )

        return AuthenticatedUser(user=user, session=session)

    def sign_up(
        self,
        name: str,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuthenticatedUser:
        """Create an account, then sign in to it.

        Raises:
            ValueError: If the password is shorter than the configured minimum.
            UserAlreadyExistsError: If the email is already registered.
            RemoteServiceError: If the account service fails.
        """
        email = email.lower().strip()
        name = name.strip()

        if len(password) < self._config.password_min_length:
            raise ValueError(
                f"Password must be at least {self._config.password_min_length} characters"
            )

        try:
            account = self._appwrite.create_user(email=email, password=password, name=name)
        except RemoteServiceError as e:
            if e.is_conflict:
                self._security_logger.log(
                    SecurityEvent.SIGN_UP_FAILED,
                    email=email,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    details={"reason": "user_exists"},
                )
                raise UserAlreadyExistsError("An account with this email already exists") from e
            raise

        self._security_logger.log(
            SecurityEvent.USER_CREATED,
            email=email,
            user_id=account.get("$id"),
            ip_address=ip_address,
            user_agent=user_agent,
        )

        return self.sign_in(email, password, ip_address=ip_address, user_agent=user_agent)

    def sign_out(self, session_token: str, ip_address: str | None = None) -> None:
        """Revoke session (sign out).

        Safe to call with invalid token.
        """
        try:
            user = self._session_manager.validate_session(session_token)
            email, user_id = user.email, user.id
        except SessionExpiredError:
            self._security_logger.log(SecurityEvent.SESSION_EXPIRED, ip_address=ip_address)
            return

        self._session_manager.revoke_session(session_token)

        self._security_logger.log(
            SecurityEvent.SESSION_REVOKED,
            email=email,
            user_id=user_id,
            ip_address=ip_address,
        )

    def get_current_user(self, session_token: str) -> User:
        """User owning the session.

        Raises:
            SessionExpiredError: If session invalid or expired.
        """
        return self._session_manager.validate_session(session_token)

    def cookie_max_age(self, session: Session) -> int:
        """Lifetime in seconds for the cookie carrying this session."""
        return self._session_manager.cookie_max_age(session)
