"""Authentication configuration."""

from pydantic import BaseModel, Field


class AuthConfig(BaseModel):
    """
    Authentication configuration.

    Sessions themselves live in the account service; these settings only
    shape the cookie that carries the session secret and the sign-up rules.
    """

    # Session cookie
    session_cookie_name: str = Field(
        default="session_token",
        description="Cookie carrying the session secret",
        min_length=1,
    )
    session_cookie_secure: bool = Field(
        default=True,
        description="Send the session cookie over HTTPS only",
    )
    session_cookie_samesite: str = Field(
        default="lax",
        description="SameSite policy for the session cookie",
        pattern="^(lax|strict|none)$",
    )
    session_max_age_hours: int = Field(
        default=8760,  # 365 days, the account service default
        description="Upper bound on session cookie lifetime in hours",
        ge=1,
        le=8760,
    )

    # Sign-up
    password_min_length: int = Field(
        default=8,
        description="Minimum password length for new accounts",
        ge=8,
        le=256,
    )

    # Application
    app_name: str = Field(
        default="Invoice Dashboard",
        description="Application name shown to users",
    )
