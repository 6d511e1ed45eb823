"""
Session state helpers for Streamlit.
"""

import time

import streamlit as st

from moviedb.core.filters import FilterState


def get_admin_token() -> str | None:
    """Admin token if the session is still valid; an expired one is dropped."""
    token = st.session_state.get("admin_token")
    expires_at = st.session_state.get("admin_expires_at")
    if not token or not expires_at:
        return None
    if time.time() > expires_at:
        clear_admin_session()
        return None
    return token


def is_admin() -> bool:
    """Whether admin mode is unlocked."""
    return get_admin_token() is not None


def set_admin_session(token: str, expires_at: float) -> None:
    """Remember the admin session."""
    st.session_state["admin_token"] = token
    st.session_state["admin_expires_at"] = expires_at


def clear_admin_session() -> None:
    """Forget the admin session."""
    for key in ("admin_token", "admin_expires_at"):
        if key in st.session_state:
            del st.session_state[key]


def get_filter_state() -> FilterState:
    """Filter state for the collection page."""
    return st.session_state["filter_state"]


def init_session_state() -> None:
    """Initialize session state keys if not present."""
    if "admin_token" not in st.session_state:
        st.session_state["admin_token"] = None
    if "admin_expires_at" not in st.session_state:
        st.session_state["admin_expires_at"] = None
    if "filter_state" not in st.session_state:
        st.session_state["filter_state"] = FilterState()
    if "selected_movie_id" not in st.session_state:
        st.session_state["selected_movie_id"] = None
