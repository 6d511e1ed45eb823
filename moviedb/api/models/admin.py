"""
Pydantic schemas for admin login and password management.
"""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Request body for admin login."""

    password: str


class SessionResponse(BaseModel):
    """Admin session state; token is only returned on login."""

    active: bool
    token: str | None = None
    expires_at: float | None = None


class PasswordChangeRequest(BaseModel):
    """Request body for changing the admin password."""

    current_password: str
    new_password: str
    confirm_password: str


class PasswordChangeResponse(BaseModel):
    """Hash of the new admin password (store it as ADMIN_PASSWORD_HASH)."""

    password_hash: str
