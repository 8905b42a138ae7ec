"""Security event logging for the auth audit trail.

Events go to the 'auth.security' logger as one structured record each, so
they can be routed to their own handler without touching app logs.
"""

import logging
from enum import Enum
from typing import Any

from utils.timezone import now_utc


class SecurityEvent(Enum):
    """Auth security event types."""

    SIGN_IN_SUCCEEDED = "sign_in_succeeded"
    SIGN_IN_FAILED = "sign_in_failed"
    SIGN_UP_FAILED = "sign_up_failed"
    USER_CREATED = "user_created"
    SESSION_CREATED = "session_created"
    SESSION_EXPIRED = "session_expired"
    SESSION_REVOKED = "session_revoked"


# Events logged at WARNING; everything else at INFO
_WARNING_EVENTS = {
    SecurityEvent.SIGN_IN_FAILED,
    SecurityEvent.SIGN_UP_FAILED,
    SecurityEvent.SESSION_EXPIRED,
}


class SecurityLogger:
    """Append-only security event logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger("auth.security")

    def log(
        self,
        event: SecurityEvent,
        email: str | None = None,
        user_id: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Log security event."""
        record = {
            "event_type": event.value,
            "email": email,
            "user_id": user_id,
            "ip_address": ip_address,
            "user_agent": user_agent,
            "details": details,
            "created_at": now_utc().isoformat(),
        }
        level = logging.WARNING if event in _WARNING_EVENTS else logging.INFO
        self._logger.log(level, "security event %s", event.value, extra={"security_event": record})
