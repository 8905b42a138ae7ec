"""Tests for SessionManager - session token lifecycle."""

from datetime import timedelta

import pytest

from auth.session import SessionManager
from auth.config import AuthConfig
from auth.exceptions import InvalidCredentialsError, SessionExpiredError
from auth.types import Session
from clients.appwrite_client import RemoteServiceError
from utils.timezone import now_utc


@pytest.fixture
def config():
    """Test config with a one hour cookie cap."""
    return AuthConfig(session_max_age_hours=1)


@pytest.fixture
def session_manager(appwrite, config):
    """SessionManager over the in-memory Appwrite with one registered account."""
    appwrite.create_user("ada@example.com", "correct-horse", "Ada")
    return SessionManager(appwrite, config)


class TestCreateSession:
    """Test session creation."""

    def test_returns_session(self, session_manager, appwrite):
        session = session_manager.create_session("ada@example.com", "correct-horse")

        assert session.token in appwrite.sessions
        assert session.expires_at > session.created_at

    def test_wrong_password_raises(self, session_manager):
        with pytest.raises(InvalidCredentialsError):
            session_manager.create_session("ada@example.com", "wrong")

    def test_unknown_email_raises(self, session_manager):
        with pytest.raises(InvalidCredentialsError):
            session_manager.create_session("nobody@example.com", "correct-horse")

    def test_bad_request_is_invalid_credentials(self, session_manager, appwrite, monkeypatch):
        def reject(email, password):
            raise RemoteServiceError("Invalid `email` param", 400, "general_argument_invalid")

        monkeypatch.setattr(appwrite, "create_email_session", reject)

        with pytest.raises(InvalidCredentialsError):
            session_manager.create_session("not-quite", "x")

    def test_server_failure_propagates(self, session_manager, appwrite, monkeypatch):
        def down(email, password):
            raise RemoteServiceError("Server error", 500)

        monkeypatch.setattr(appwrite, "create_email_session", down)

        with pytest.raises(RemoteServiceError):
            session_manager.create_session("ada@example.com", "correct-horse")


class TestValidateSession:
    """Test session validation."""

    def test_returns_user(self, session_manager):
        session = session_manager.create_session("ada@example.com", "correct-horse")

        user = session_manager.validate_session(session.token)

        assert user.id == session.user_id
        assert user.email == "ada@example.com"
        assert user.name == "Ada"

    def test_unknown_token_raises(self, session_manager):
        with pytest.raises(SessionExpiredError):
            session_manager.validate_session("not-a-token")


class TestRevokeSession:
    """Test session revocation."""

    def test_revoked_session_invalid(self, session_manager):
        session = session_manager.create_session("ada@example.com", "correct-horse")

        session_manager.revoke_session(session.token)

        with pytest.raises(SessionExpiredError):
            session_manager.validate_session(session.token)

    def test_revoke_nonexistent_is_noop(self, session_manager):
        session_manager.revoke_session("not-a-token")


class TestCookieMaxAge:
    """Cookie lifetime follows the session, capped by config."""

    def _session(self, lifetime):
        now = now_utc()
        return Session(id="s1", token="t", user_id="u1", created_at=now, expires_at=now + lifetime)

    def test_capped_by_config(self, session_manager):
        assert session_manager.cookie_max_age(self._session(timedelta(days=365))) == 3600

    def test_shorter_session_wins(self, session_manager):
        assert session_manager.cookie_max_age(self._session(timedelta(minutes=10))) == 600

    def test_never_negative(self, session_manager):
        assert session_manager.cookie_max_age(self._session(timedelta(minutes=-5))) == 0
