"""
Admin authentication and time-limited admin sessions.

There is exactly one admin. Logging in with the password returns an opaque
token that unlocks write and moderation endpoints until it expires.
"""

import hashlib
import logging
import secrets
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from moviedb.core.errors import AdminAuthError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TIMEOUT = 24 * 60 * 60
MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    """SHA-256 hex digest of a password."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


@dataclass
class AdminSession:
    """An active admin session."""

    token: str
    expires_at: float


class AdminSessionStore:
    """
    In-process store of admin sessions.

    Args:
        password_hash: SHA-256 hex digest the password is checked against
        timeout_seconds: Session lifetime
        clock: Time source returning seconds since the epoch
    """

    def __init__(
        self,
        password_hash: Optional[str],
        timeout_seconds: float = DEFAULT_SESSION_TIMEOUT,
        clock: Callable[[], float] = time.time,
    ):
        self.password_hash = password_hash
        self.timeout_seconds = timeout_seconds
        self.clock = clock
        self._sessions: Dict[str, float] = {}

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        return secrets.compare_digest(hash_password(password), self.password_hash)

    def login(self, password: str) -> AdminSession:
        """
        Start an admin session.

        Raises:
            AdminAuthError: If the password is empty or wrong
        """
        if not password or not password.strip():
            raise AdminAuthError("Please enter a password")
        if not self.check_password(password.strip()):
            logger.warning("Failed admin login attempt")
            raise AdminAuthError("Incorrect password")

        self.purge_expired()
        token = secrets.token_urlsafe(32)
        expires_at = self.clock() + self.timeout_seconds
        self._sessions[token] = expires_at
        logger.info("Admin logged in")
        return AdminSession(token=token, expires_at=expires_at)

    def purge_expired(self) -> int:
        """Drop every expired session; returns how many were removed."""
        now = self.clock()
        expired = [token for token, expires_at in self._sessions.items() if now > expires_at]
        for token in expired:
            del self._sessions[token]
        return len(expired)

    def is_active(self, token: Optional[str]) -> bool:
        """Check a token; expired sessions are dropped."""
        if not token:
            return False
        expires_at = self._sessions.get(token)
        if expires_at is None:
            return False
        if self.clock() > expires_at:
            self.logout(token)
            return False
        return True

    def get_session(self, token: Optional[str]) -> Optional[AdminSession]:
        if not self.is_active(token):
            return None
        return AdminSession(token=token, expires_at=self._sessions[token])

    def logout(self, token: Optional[str]) -> None:
        if token and self._sessions.pop(token, None) is not None:
            logger.info("Admin logged out")

    def validate_password_change(self, current: str, new: str, confirm: str) -> str:
        """
        Check a password change request.

        Returns:
            Hash of the new password

        Raises:
            ValidationError: If a field is empty, the new passwords differ or
                the new password is too short
            AdminAuthError: If the current password is wrong
        """
        if not current or not new or not confirm:
            raise ValidationError("All fields are required")
        if new != confirm:
            raise ValidationError("New passwords do not match")
        if len(new) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if not self.check_password(current):
            raise AdminAuthError("Current password is incorrect")
        return hash_password(new)

    def set_password_hash(self, password_hash: str) -> None:
        self.password_hash = password_hash
