"""
Admin login, logout and password management endpoints.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from moviedb.api.dependencies import (
    get_admin_token,
    get_db,
    get_session_store,
    require_admin,
    to_http_exception,
)
from moviedb.api.models.admin import (
    LoginRequest,
    PasswordChangeRequest,
    PasswordChangeResponse,
    SessionResponse,
)
from moviedb.core.auth import AdminSessionStore
from moviedb.core.errors import MovieDBError
from moviedb.database import crud

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _sync_password_hash(db: Session, store: AdminSessionStore) -> None:
    """A password stored in the database overrides the configured one."""
    stored = crud.get_admin_password_hash(db)
    if stored:
        store.set_password_hash(stored)


@router.post("/login", response_model=SessionResponse)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    store: AdminSessionStore = Depends(get_session_store),
):
    """Start an admin session."""
    _sync_password_hash(db, store)
    try:
        session = store.login(body.password)
    except MovieDBError as e:
        raise to_http_exception(e)
    return SessionResponse(active=True, token=session.token, expires_at=session.expires_at)


@router.post("/logout", response_model=SessionResponse)
def logout(
    token: str | None = Depends(get_admin_token),
    store: AdminSessionStore = Depends(get_session_store),
):
    """End the admin session."""
    store.logout(token)
    return SessionResponse(active=False)


@router.get("/session", response_model=SessionResponse)
def session_status(
    token: str | None = Depends(get_admin_token),
    store: AdminSessionStore = Depends(get_session_store),
):
    """Whether the sent token is a live admin session."""
    session = store.get_session(token)
    if session is None:
        return SessionResponse(active=False)
    return SessionResponse(active=True, expires_at=session.expires_at)


@router.post("/password", response_model=PasswordChangeResponse)
def change_password(
    body: PasswordChangeRequest,
    db: Session = Depends(get_db),
    store: AdminSessionStore = Depends(get_session_store),
    _: str = Depends(require_admin),
):
    """Change the admin password; the new hash is stored and returned."""
    _sync_password_hash(db, store)
    try:
        new_hash = store.validate_password_change(
            body.current_password, body.new_password, body.confirm_password
        )
    except MovieDBError as e:
        raise to_http_exception(e)
    crud.set_admin_password_hash(db, new_hash)
    store.set_password_hash(new_hash)
    return PasswordChangeResponse(password_hash=new_hash)
