"""
Low level HTTP helpers shared by the session manager and the guest
data client.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from .errors import NetworkError

logger = logging.getLogger(__name__)


def send(
    http: requests.Session,
    method: str,
    url: str,
    *,
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> requests.Response:
    """Perform an HTTP request and return the response, whatever its status.

    Transport failures (connection refused, DNS, timeouts) are raised as
    :class:`NetworkError`; HTTP error statuses are left for the caller to
    interpret.
    """
    logger.debug("Sending %s request to %s", method, url)
    try:
        response = http.request(method, url, timeout=timeout, **kwargs)
    except requests.RequestException as exc:
        logger.error("%s %s failed: %s", method, url, exc)
        raise NetworkError(str(exc) or None) from exc
    logger.debug("%s %s -> %s", method, url, response.status_code)
    return response


def detail_from_response(response: requests.Response) -> Optional[str]:
    """Return the server-supplied ``detail`` message of an error response.

    Returns ``None`` when the body is not JSON or carries no usable
    string message, so callers can fall back to a generic message.
    """
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    detail = body.get("detail") or body.get("message")
    if isinstance(detail, str) and detail.strip():
        return detail
    return None
