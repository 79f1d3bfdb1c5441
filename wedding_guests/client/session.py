"""Session manager for the guest list admin client.

The :class:`SessionManager` owns the bearer credential.  It is created
once at startup, initialised from durable storage, and handed to every
component that issues authenticated requests.  The credential only
changes through :meth:`~SessionManager.login`,
:meth:`~SessionManager.logout` and :meth:`~SessionManager.expire`;
every change is written through to the :class:`TokenStore` and
announced to subscribers, which is how the presentation layer knows to
switch between the login and dashboard views.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

import requests

from ..core.config import Settings
from .errors import AuthenticationError
from .http import detail_from_response, send
from .token_store import TokenStore

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[str]], None]


class SessionManager:
    """Holds at most one bearer token and keeps storage in sync with it."""

    LOGIN_PATH = "/auth/login"

    def __init__(
        self,
        *,
        base_url: str,
        store: TokenStore,
        token_key: str = "authToken",
        scope: str = "noivo convidado",
        http: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialise the session from durable storage.

        Args:
            base_url: Base URL of the backend, e.g. ``http://localhost:8000``.
            store: Durable storage for the token.
            token_key: Storage key the token is kept under.
            scope: Fixed scope value sent with every login.
            http: Optional requests session.  If not supplied a session
                will be created automatically.
            timeout: Per-request timeout in seconds, ``None`` to wait on
                the transport.
        """
        self.base_url = base_url.rstrip("/")
        self.store = store
        self.token_key = token_key
        self.scope = scope
        self.http = http or requests.Session()
        self.timeout = timeout
        self._listeners: List[SessionListener] = []
        self._token: Optional[str] = store.get(token_key) or None
        if self._token:
            logger.info("Restored session from %s", store.path)

    @classmethod
    def from_settings(cls, settings: Settings, *, http: Optional[requests.Session] = None) -> "SessionManager":
        return cls(
            base_url=settings.backend_url,
            store=TokenStore(settings.token_file),
            token_key=settings.token_key,
            scope=settings.login_scope,
            http=http,
            timeout=settings.request_timeout,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def auth_headers(self) -> Dict[str, str]:
        """Return the ``Authorization`` header for the current token."""
        if self._token is None:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Call ``listener`` with the new token (or ``None``) on every change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_token(self, token: Optional[str]) -> None:
        if token:
            self.store.set(self.token_key, token)
        else:
            token = None
            self.store.remove(self.token_key)
        changed = token != self._token
        self._token = token
        if changed:
            for listener in list(self._listeners):
                listener(token)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def login(self, identifier: str, secret: str) -> str:
        """Authenticate against the backend and store the returned token.

        The credentials are posted form-encoded together with the fixed
        scope value.  A rejected login leaves the current session as it
        was.

        Raises:
            AuthenticationError: the backend answered with an error status
                or without an ``access_token``, or the token could not be
                written to the token file.
            NetworkError: the backend could not be reached.
        """
        url = f"{self.base_url}{self.LOGIN_PATH}"
        form = {"username": identifier, "password": secret, "scope": self.scope}
        response = send(self.http, "POST", url, data=form, timeout=self.timeout)
        if not response.ok:
            message = detail_from_response(response)
            logger.warning("Login rejected for %s (%s)", identifier, response.status_code)
            raise AuthenticationError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            body = None
        token = body.get("access_token") if isinstance(body, dict) else None
        if not isinstance(token, str) or not token:
            logger.error("Login response from %s carried no access_token", url)
            raise AuthenticationError(status_code=response.status_code)

        try:
            self._set_token(token)
        except OSError as exc:
            logger.error("Could not write the session token to %s: %s", self.store.path, exc)
            raise AuthenticationError("Could not store the session token.") from exc
        logger.info("Logged in as %s", identifier)
        return token

    def logout(self) -> None:
        """Forget the token locally.  The backend is not contacted."""
        self._set_token(None)
        logger.info("Logged out")

    def expire(self) -> None:
        """Drop the token after the backend rejected it with HTTP 401."""
        if self._token is not None:
            logger.warning("Session expired; the backend rejected the stored token")
        self._set_token(None)
