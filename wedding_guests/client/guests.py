"""Guest list API client.

This module wraps the backend's guest endpoints:

* :meth:`GuestListAPI.list` – ``GET /convidados``, the full collection.
* :meth:`GuestListAPI.save` – ``POST /convidados/`` for new guests,
  ``PUT /convidados/{id}`` for existing ones.
* :meth:`GuestListAPI.delete` – ``DELETE /convidados/{id}``.

All requests carry the bearer token held by the
:class:`~wedding_guests.client.session.SessionManager` passed in at
construction.  Whenever the backend answers ``401`` the session is
expired before the operation's error is raised, so the presentation
layer falls back to the login view.

The client keeps no local copy of the collection and never retries;
callers re-run :meth:`GuestListAPI.list` after every mutation.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Type

import requests
from pydantic import ValidationError

from ..schemas.guest import Guest
from .errors import (
    DeleteError,
    FetchError,
    GuestListError,
    GuestValidationError,
    SaveError,
)
from .http import detail_from_response, send
from .session import SessionManager

logger = logging.getLogger(__name__)


class GuestListAPI:
    """Client for the guest collection of the wedding guest list backend."""

    COLLECTION_PATH = "/convidados"

    def __init__(self, session: SessionManager) -> None:
        self.session = session

    @property
    def base_url(self) -> str:
        return self.session.base_url

    @property
    def http(self) -> requests.Session:
        return self.session.http

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _guest_path(self, guest_id: Any) -> str:
        return f"{self.COLLECTION_PATH}/{guest_id}"

    def _request(
        self,
        method: str,
        path: str,
        error_cls: Type[GuestListError],
        *,
        json_body: Any | None = None,
        use_detail: bool = True,
    ) -> requests.Response:
        """Perform an authenticated request and return a successful response.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the backend base URL.
            error_cls: Exception raised when the backend answers with an
                error status.
            json_body: JSON body to send with the request.
            use_detail: Whether the server's ``detail`` message replaces
                the generic message of ``error_cls``.
        Raises:
            error_cls: on any non-2xx status, or when no token is held.
            NetworkError: when the backend could not be reached.
        """
        if not self.session.is_authenticated:
            raise error_cls("Not authenticated", status_code=401)

        headers: Dict[str, str] = dict(self.session.auth_headers())
        if json_body is not None:
            headers["Content-Type"] = "application/json"
        url = f"{self.base_url}{path}"
        response = send(
            self.http,
            method,
            url,
            json=json_body,
            headers=headers,
            timeout=self.session.timeout,
        )
        if response.ok:
            return response

        if response.status_code == 401:
            self.session.expire()
        message = detail_from_response(response) if use_detail else None
        logger.error("%s %s failed (%s): %s", method, path, response.status_code, message or "-")
        raise error_cls(message, status_code=response.status_code)

    # ------------------------------------------------------------------
    # Guest operations
    # ------------------------------------------------------------------
    def list(self) -> List[Guest]:
        """Retrieve every guest, in the order the backend returns them.

        Raises:
            FetchError: the listing failed.  On ``401`` the session has
                already been expired when this is raised.
        """
        response = self._request("GET", self.COLLECTION_PATH, FetchError, use_detail=False)
        try:
            data = response.json()
        except ValueError as exc:
            raise FetchError(status_code=response.status_code) from exc
        if not isinstance(data, list):
            logger.error("Expected a JSON array from %s, got %s", self.COLLECTION_PATH, type(data).__name__)
            raise FetchError(status_code=response.status_code)
        try:
            guests = [Guest.model_validate(item) for item in data]
        except ValidationError as exc:
            logger.error("Malformed guest record from %s: %s", self.COLLECTION_PATH, exc)
            raise FetchError(status_code=response.status_code) from exc
        logger.debug("Loaded %d guests", len(guests))
        return guests

    def save(self, guest: Guest) -> None:
        """Create ``guest`` if it has no identifier, otherwise replace it.

        The whole record is sent as the JSON body.  A blank name is
        rejected before any request is built.

        Raises:
            GuestValidationError: the name is blank.
            SaveError: the backend rejected the create or update.
        """
        if guest.is_blank():
            raise GuestValidationError()

        if guest.has_id:
            body = guest.model_dump(mode="json")
            self._request("PUT", self._guest_path(guest.convidado_id), SaveError, json_body=body)
            logger.info("Updated guest %s", guest.convidado_id)
        else:
            body = guest.model_dump(mode="json", exclude={"convidado_id"})
            self._request("POST", f"{self.COLLECTION_PATH}/", SaveError, json_body=body)
            logger.info("Created guest %r", guest.nome)

    def delete(self, guest: Guest) -> None:
        """Remove ``guest`` from the list.

        Confirmation is the caller's responsibility; this issues the
        request unconditionally.

        Raises:
            DeleteError: the backend rejected the delete, or the guest has
                no identifier.
        """
        if not guest.has_id:
            raise DeleteError("Guest has no identifier.")
        self._request("DELETE", self._guest_path(guest.convidado_id), DeleteError)
        logger.info("Deleted guest %s", guest.convidado_id)

