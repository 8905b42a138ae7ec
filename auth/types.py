"""Pydantic models for auth domain."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field

from utils.timezone import parse_iso


class User(BaseModel):
    """A registered user, as known to the account service."""

    id: str
    email: EmailStr
    name: str = ""
    email_verified: bool = False
    created_at: datetime | None = None

    @classmethod
    def from_account(cls, account: dict[str, Any]) -> "User":
        """Build a User from an Appwrite account payload."""
        created = account.get("$createdAt")
        return cls(
            id=account["$id"],
            email=account["email"],
            name=account.get("name") or "",
            email_verified=bool(account.get("emailVerification", False)),
            created_at=parse_iso(created) if created else None,
        )


class Session(BaseModel):
    """An active user session."""

    id: str
    token: str = Field(..., description="Session secret (opaque string)")
    user_id: str
    created_at: datetime
    expires_at: datetime

    @classmethod
    def from_appwrite(cls, payload: dict[str, Any]) -> "Session":
        """Build a Session from an Appwrite session payload."""
        return cls(
            id=payload["$id"],
            token=payload["secret"],
            user_id=payload["userId"],
            created_at=parse_iso(payload["$createdAt"]),
            expires_at=parse_iso(payload["expire"]),
        )


class SignInRequest(BaseModel):
    """Request payload for email/password sign-in."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=256)


class SignUpRequest(BaseModel):
    """Request payload for account registration."""

    name: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=256)


class AuthenticatedUser(BaseModel):
    """User info returned after successful authentication."""

    user: User
    session: Session
