"""
Unit tests for admin authentication and sessions.
"""

import pytest

from moviedb.core.auth import AdminSessionStore, hash_password
from moviedb.core.errors import AdminAuthError, ValidationError


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return AdminSessionStore(hash_password("secret1"), timeout_seconds=60, clock=clock)


class TestLogin:
    """Tests for login and session lifetime."""

    def test_hash_password(self):
        assert hash_password("secret1") == hash_password("secret1")
        assert len(hash_password("secret1")) == 64

    def test_login_success(self, store, clock):
        session = store.login("secret1")
        assert session.token
        assert session.expires_at == clock.now + 60
        assert store.is_active(session.token)

    def test_login_strips_whitespace(self, store):
        assert store.is_active(store.login("  secret1 ").token)

    def test_login_empty_password(self, store):
        with pytest.raises(AdminAuthError, match="Please enter a password"):
            store.login("   ")

    def test_login_wrong_password(self, store):
        with pytest.raises(AdminAuthError, match="Incorrect password"):
            store.login("nope")

    def test_login_disabled_without_hash(self, clock):
        store = AdminSessionStore(None, clock=clock)
        with pytest.raises(AdminAuthError):
            store.login("anything")

    def test_session_expires(self, store, clock):
        token = store.login("secret1").token
        clock.now += 61
        assert not store.is_active(token)
        assert store.get_session(token) is None

    def test_login_purges_expired_sessions(self, store, clock):
        """Abandoned sessions are dropped on the next login."""
        store.login("secret1")
        store.login("secret1")
        clock.now += 61

        fresh = store.login("secret1")

        assert list(store._sessions) == [fresh.token]

    def test_purge_expired_keeps_live_sessions(self, store, clock):
        old = store.login("secret1").token
        clock.now += 30
        live = store.login("secret1").token
        clock.now += 31

        assert store.purge_expired() == 1
        assert not store.is_active(old)
        assert store.is_active(live)

    def test_logout(self, store):
        token = store.login("secret1").token
        store.logout(token)
        assert not store.is_active(token)

    def test_unknown_token(self, store):
        assert not store.is_active("bogus")
        assert not store.is_active(None)


class TestPasswordChange:
    """Tests for validate_password_change."""

    def test_success(self, store):
        assert store.validate_password_change("secret1", "better1", "better1") == hash_password("better1")

    def test_missing_fields(self, store):
        with pytest.raises(ValidationError, match="All fields are required"):
            store.validate_password_change("secret1", "", "")

    def test_mismatch(self, store):
        with pytest.raises(ValidationError, match="do not match"):
            store.validate_password_change("secret1", "better1", "better2")

    def test_too_short(self, store):
        with pytest.raises(ValidationError, match="at least 6"):
            store.validate_password_change("secret1", "abc", "abc")

    def test_wrong_current(self, store):
        with pytest.raises(AdminAuthError, match="Current password is incorrect"):
            store.validate_password_change("wrong", "better1", "better1")

    def test_set_password_hash(self, store):
        store.set_password_hash(hash_password("better1"))
        assert store.check_password("better1")
        assert not store.check_password("secret1")
