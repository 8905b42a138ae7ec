"""Tests for auth/exceptions.py - Typed exceptions for auth failures."""

import pytest

from auth.exceptions import (
    AuthError,
    InvalidCredentialsError,
    SessionExpiredError,
    UserAlreadyExistsError,
)


class TestExceptionInheritance:
    """All auth exceptions should inherit from AuthError."""

    def test_invalid_credentials_inherits(self):
        assert issubclass(InvalidCredentialsError, AuthError)

    def test_user_already_exists_inherits(self):
        assert issubclass(UserAlreadyExistsError, AuthError)

    def test_session_expired_inherits(self):
        assert issubclass(SessionExpiredError, AuthError)

    def test_auth_error_is_not_value_error(self):
        """Auth failures must not be mistaken for bad request input."""
        assert not issubclass(AuthError, ValueError)


class TestExceptionMessages:

    def test_message_preserved(self):
        with pytest.raises(AuthError, match="expired"):
            raise SessionExpiredError("Session not found or expired")
