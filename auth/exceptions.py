"""Typed exceptions for auth failures."""


class AuthError(Exception):
    """Base class for authentication/authorization errors."""


class InvalidCredentialsError(AuthError):
    """
    Email/password pair was rejected.

    Note: In user-facing responses, don't reveal whether the email exists.
    """


class UserAlreadyExistsError(AuthError):
    """An account with this email already exists."""


class SessionExpiredError(AuthError):
    """Session is missing, expired or revoked. User must sign in again."""
