"""
Admin client for the wedding guest list backend.

:class:`SessionManager` owns the bearer token and its persistence,
:class:`GuestListAPI` performs the guest CRUD requests with it, and
:mod:`.dashboard` holds the presentation state driven by both.
"""

from .dashboard import AdminApp, GuestDashboard, LoginForm
from .errors import (
    AuthenticationError,
    DeleteError,
    FetchError,
    GuestListError,
    GuestValidationError,
    NetworkError,
    SaveError,
)
from .guests import GuestListAPI
from .session import SessionManager
from .token_store import TokenStore

__all__ = [
    "AdminApp",
    "AuthenticationError",
    "DeleteError",
    "FetchError",
    "GuestDashboard",
    "GuestListAPI",
    "GuestListError",
    "GuestValidationError",
    "LoginForm",
    "NetworkError",
    "SaveError",
    "SessionManager",
    "TokenStore",
]
