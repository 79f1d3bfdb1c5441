"""
Exceptions raised by the admin client.

Every error carries a user-facing ``message`` and, when the failure
came from an HTTP response, the ``status_code`` of that response.
"""

from typing import Optional


class GuestListError(Exception):
    """Base class for admin client failures."""

    default_message = "Request failed."

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None) -> None:
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class AuthenticationError(GuestListError):
    """The backend rejected the login."""

    default_message = "Login failed"


class FetchError(GuestListError):
    """Listing guests failed, including when the session has expired."""

    default_message = "Could not load the guest list."


class SaveError(GuestListError):
    """Creating or updating a guest was rejected."""

    default_message = "Failed to save guest."


class DeleteError(GuestListError):
    """Deleting a guest was rejected."""

    default_message = "Failed to delete guest."


class NetworkError(GuestListError):
    """The request never produced an HTTP response."""

    default_message = "Could not reach the server."


class GuestValidationError(GuestListError):
    """A guest record failed validation before any request was built."""

    default_message = "Guest name cannot be empty."
