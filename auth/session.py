"""Session lifecycle management.

Sessions are created, validated and revoked by the Appwrite account API.
The session secret Appwrite returns is the opaque token the browser holds
in its session cookie; nothing is stored locally.
"""

from auth.config import AuthConfig
from auth.exceptions import InvalidCredentialsError, SessionExpiredError
from auth.types import Session, User
from clients.appwrite_client import AppwriteClient, RemoteServiceError


class SessionManager:
    """Session lifecycle on top of the Appwrite account API."""

    def __init__(self, appwrite: AppwriteClient, config: AuthConfig):
        self._appwrite = appwrite
        self._config = config

    def create_session(self, email: str, password: str) -> Session:
        """Create a session from email and password.

        Raises:
            InvalidCredentialsError: If the account service rejects the credentials.
            RemoteServiceError: On any other account service failure.
        """
        try:
            payload = self._appwrite.create_email_session(email, password)
        except RemoteServiceError as e:
            if e.is_unauthorized or e.status_code == 400:
                raise InvalidCredentialsError("Invalid email or password") from e
            raise

        return Session.from_appwrite(payload)

    def validate_session(self, token: str) -> User:
        """Validate session token and return its user.

        Raises:
            SessionExpiredError: If token invalid, expired or revoked.
            RemoteServiceError: If the account service is unreachable.
        """
        try:
            account = self._appwrite.get_account(token)
        except RemoteServiceError as e:
            if e.is_unauthorized:
                raise SessionExpiredError("Session not found or expired") from e
            raise

        return User.from_account(account)

    def revoke_session(self, token: str) -> None:
        """Revoke session (sign out).

        Safe to call with nonexistent token.
        """
        try:
            self._appwrite.delete_session(token)
        except RemoteServiceError as e:
            if not (e.is_unauthorized or e.is_not_found):
                raise

    def cookie_max_age(self, session: Session) -> int:
        """Cookie lifetime in seconds: session expiry, capped by config."""
        remaining = int((session.expires_at - session.created_at).total_seconds())
        return max(0, min(remaining, self._config.session_max_age_hours * 3600))
