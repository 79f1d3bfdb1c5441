"""Tests for the session manager."""

from urllib.parse import parse_qs

import pytest
import requests

from tests.conftest import BASE_URL, ScriptedAdapter, http_with
from wedding_guests.client.errors import AuthenticationError, NetworkError
from wedding_guests.client.session import SessionManager
from wedding_guests.client.token_store import TokenStore


class TestLogin:
    def test_accepted_login_stores_token(self, session: SessionManager, adapter: ScriptedAdapter, store: TokenStore):
        adapter.reply(200, {"access_token": "T", "token_type": "bearer"})

        assert session.login("a@b.com", "pw") == "T"

        assert session.token == "T"
        assert session.is_authenticated
        assert store.get("authToken") == "T"

    def test_login_posts_form_with_scope(self, session: SessionManager, adapter: ScriptedAdapter):
        adapter.reply(200, {"access_token": "T"})
        session.login("a@b.com", "pw")

        request = adapter.requests[0]
        assert request.method == "POST"
        assert request.url == f"{BASE_URL}/auth/login"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert parse_qs(request.body) == {
            "username": ["a@b.com"],
            "password": ["pw"],
            "scope": ["noivo convidado"],
        }
        assert "Authorization" not in request.headers

    def test_rejected_login_uses_server_detail(self, session: SessionManager, adapter: ScriptedAdapter, store: TokenStore):
        adapter.reply(401, {"detail": "Incorrect email or password"})

        with pytest.raises(AuthenticationError) as excinfo:
            session.login("a@b.com", "wrong")

        assert excinfo.value.message == "Incorrect email or password"
        assert excinfo.value.status_code == 401
        assert not session.is_authenticated
        assert store.get("authToken") is None

    def test_rejected_login_without_detail_uses_generic_message(self, session: SessionManager, adapter: ScriptedAdapter):
        adapter.reply(500, b"<html>oops</html>")

        with pytest.raises(AuthenticationError) as excinfo:
            session.login("a@b.com", "pw")

        assert excinfo.value.message == "Login failed"

    def test_validation_error_detail_list_falls_back(self, session: SessionManager, adapter: ScriptedAdapter):
        adapter.reply(422, {"detail": [{"loc": ["body", "username"], "msg": "field required"}]})

        with pytest.raises(AuthenticationError) as excinfo:
            session.login("", "pw")

        assert excinfo.value.message == "Login failed"

    def test_success_without_token_is_an_error(self, session: SessionManager, adapter: ScriptedAdapter, store: TokenStore):
        adapter.reply(200, {"token_type": "bearer"})

        with pytest.raises(AuthenticationError):
            session.login("a@b.com", "pw")

        assert not session.is_authenticated
        assert store.get("authToken") is None

    def test_network_failure(self, session: SessionManager, adapter: ScriptedAdapter, store: TokenStore):
        adapter.fail(requests.ConnectionError("connection refused"))

        with pytest.raises(NetworkError):
            session.login("a@b.com", "pw")

        assert store.get("authToken") is None

    def test_unwritable_token_file(self, session: SessionManager, adapter: ScriptedAdapter, store: TokenStore, monkeypatch):
        def refuse(key, value):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(store, "set", refuse)
        adapter.reply(200, {"access_token": "T", "token_type": "bearer"})

        with pytest.raises(AuthenticationError) as excinfo:
            session.login("a@b.com", "pw")

        assert excinfo.value.message == "Could not store the session token."
        assert not session.is_authenticated


class TestPersistence:
    def test_restored_session_is_authenticated(self, store: TokenStore):
        store.set("authToken", "T")
        session = SessionManager(base_url=BASE_URL, store=store)
        assert session.is_authenticated
        assert session.auth_headers() == {"Authorization": "Bearer T"}

    def test_reload_after_login_keeps_session(self, session: SessionManager, adapter: ScriptedAdapter, store: TokenStore):
        adapter.reply(200, {"access_token": "T"})
        session.login("a@b.com", "pw")

        reloaded = SessionManager(base_url=BASE_URL, store=store, http=http_with(adapter))
        assert reloaded.token == "T"

    def test_empty_store_starts_unauthenticated(self, session: SessionManager):
        assert not session.is_authenticated
        assert session.auth_headers() == {}

    def test_custom_token_key(self, store: TokenStore, adapter: ScriptedAdapter):
        session = SessionManager(base_url=BASE_URL, store=store, token_key="guestToken", http=http_with(adapter))
        adapter.reply(200, {"access_token": "T"})
        session.login("a@b.com", "pw")
        assert store.get("guestToken") == "T"
        assert store.get("authToken") is None


class TestLogout:
    def test_logout_clears_token(self, logged_in: SessionManager, store: TokenStore):
        logged_in.logout()
        assert not logged_in.is_authenticated
        assert store.get("authToken") is None

    def test_logout_when_logged_out_clears_storage(self, session: SessionManager, store: TokenStore):
        # A token written behind the session's back is still removed.
        store.set("authToken", "stale")
        session.logout()
        assert store.get("authToken") is None

    def test_logout_makes_no_request(self, logged_in: SessionManager, adapter: ScriptedAdapter):
        logged_in.logout()
        assert adapter.requests == []


class TestSubscriptions:
    def test_listeners_see_every_change(self, session: SessionManager, adapter: ScriptedAdapter):
        seen = []
        session.subscribe(seen.append)

        adapter.reply(200, {"access_token": "T"})
        session.login("a@b.com", "pw")
        session.logout()

        assert seen == ["T", None]

    def test_no_notification_without_change(self, session: SessionManager):
        seen = []
        session.subscribe(seen.append)
        session.logout()
        session.expire()
        assert seen == []

    def test_unsubscribe(self, logged_in: SessionManager):
        seen = []
        unsubscribe = logged_in.subscribe(seen.append)
        unsubscribe()
        logged_in.logout()
        assert seen == []

    def test_expire_notifies(self, logged_in: SessionManager, store: TokenStore):
        seen = []
        logged_in.subscribe(seen.append)
        logged_in.expire()
        assert seen == [None]
        assert store.get("authToken") is None
