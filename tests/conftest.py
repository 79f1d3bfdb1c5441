"""Shared test fixtures."""

import json
from typing import Any, List, Optional

import pytest
import requests
from fastapi.testclient import TestClient
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from wedding_guests.client.guests import GuestListAPI
from wedding_guests.client.session import SessionManager
from wedding_guests.client.token_store import TokenStore
from wedding_guests.core.config import settings
from wedding_guests.core.db import init_db

BASE_URL = "http://backend.test"
ADMIN_EMAIL = "a@b.com"
ADMIN_PASSWORD = "pw"


def make_response(
    request: requests.PreparedRequest,
    status_code: int,
    content: bytes = b"",
    headers: Optional[dict] = None,
) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response.headers = CaseInsensitiveDict(headers or {})
    response.url = request.url
    response.request = request
    response.encoding = "utf-8"
    return response


class ScriptedAdapter(BaseAdapter):
    """Transport adapter that replays queued responses and records requests.

    Queue entries are ``(status, body)`` tuples, where ``body`` is JSON
    serialisable, raw ``bytes`` or ``None`` for an empty body, or an
    exception instance to raise instead of answering.
    """

    def __init__(self) -> None:
        super().__init__()
        self.queue: List[Any] = []
        self.requests: List[requests.PreparedRequest] = []

    def reply(self, status: int, body: Any = None) -> "ScriptedAdapter":
        self.queue.append((status, body))
        return self

    def fail(self, exc: Exception) -> "ScriptedAdapter":
        self.queue.append(exc)
        return self

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        if not self.queue:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        entry = self.queue.pop(0)
        if isinstance(entry, Exception):
            raise entry
        status, body = entry
        headers = {}
        if body is None:
            content = b""
        elif isinstance(body, bytes):
            content = body
        else:
            content = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"
        return make_response(request, status, content, headers)

    def close(self) -> None:
        pass

    @property
    def calls(self) -> List[tuple]:
        return [(r.method, r.path_url) for r in self.requests]


class BackendAdapter(BaseAdapter):
    """Transport adapter that forwards requests to a FastAPI ``TestClient``."""

    def __init__(self, client: TestClient) -> None:
        super().__init__()
        self.client = client
        self.calls: List[tuple] = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.calls.append((request.method, request.path_url))
        headers = {k: v for k, v in request.headers.items() if k.lower() != "content-length"}
        resp = self.client.request(
            request.method,
            request.path_url,
            content=request.body,
            headers=headers,
        )
        return make_response(request, resp.status_code, resp.content, dict(resp.headers))

    def close(self) -> None:
        pass


def http_with(adapter: BaseAdapter) -> requests.Session:
    http = requests.Session()
    http.mount("http://", adapter)
    return http


@pytest.fixture(name="token_file")
def token_file_fixture(tmp_path):
    return tmp_path / "storage.json"


@pytest.fixture(name="store")
def store_fixture(token_file) -> TokenStore:
    return TokenStore(token_file)


@pytest.fixture(name="adapter")
def adapter_fixture() -> ScriptedAdapter:
    return ScriptedAdapter()


@pytest.fixture(name="session")
def session_fixture(store: TokenStore, adapter: ScriptedAdapter) -> SessionManager:
    """A logged-out session whose HTTP traffic goes to ``adapter``."""
    return SessionManager(base_url=BASE_URL, store=store, http=http_with(adapter))


@pytest.fixture(name="logged_in")
def logged_in_fixture(store: TokenStore, adapter: ScriptedAdapter) -> SessionManager:
    """A session restored from storage holding token ``T``."""
    store.set("authToken", "T")
    return SessionManager(base_url=BASE_URL, store=store, http=http_with(adapter))


@pytest.fixture(name="api")
def api_fixture(logged_in: SessionManager) -> GuestListAPI:
    return GuestListAPI(logged_in)


@pytest.fixture(name="backend_db")
def backend_db_fixture(tmp_path, monkeypatch):
    """Point the development backend at a fresh database with one admin."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "guests.db"))
    monkeypatch.setattr(settings, "admin_email", ADMIN_EMAIL)
    monkeypatch.setattr(settings, "admin_password", ADMIN_PASSWORD)
    init_db()
    return settings


@pytest.fixture(name="client")
def client_fixture(backend_db):
    """A ``TestClient`` for the development backend."""
    from wedding_guests.app.main import create_app

    with TestClient(create_app()) as client:
        yield client


@pytest.fixture(name="backend")
def backend_fixture(client: TestClient) -> BackendAdapter:
    return BackendAdapter(client)
