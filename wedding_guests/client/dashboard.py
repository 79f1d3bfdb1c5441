"""Presentation state for the guest list admin.

These classes hold what a UI needs to render the two screens of the
admin tool and react to user input, without knowing how anything is
drawn:

* :class:`LoginForm` – the credentials form and its error line.
* :class:`GuestDashboard` – the guest list, the add/edit modal and the
  delete confirmation.
* :class:`AdminApp` – picks the screen from the session state and
  re-renders whenever the session changes.

User interaction that blocks (alerts and confirmations) is injected as
callables so that a terminal, a GUI or a test can supply its own.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..schemas.guest import AttendanceStatus, Guest
from .errors import GuestListError, GuestValidationError
from .guests import GuestListAPI
from .session import SessionManager

logger = logging.getLogger(__name__)

AlertFn = Callable[[str], None]
ConfirmFn = Callable[[str], bool]
RenderFn = Callable[["AdminApp"], None]


class LoginForm:
    """State of the login screen."""

    GENERIC_ERROR = "An error occurred. Check your credentials."

    def __init__(self, session: SessionManager) -> None:
        self.session = session
        self.error = ""
        self.is_loading = False

    def submit(self, email: str, password: str) -> bool:
        """Try to log in; on failure the message ends up in :attr:`error`."""
        self.error = ""
        self.is_loading = True
        try:
            self.session.login(email, password)
            return True
        except GuestListError as exc:
            self.error = exc.message or self.GENERIC_ERROR
            return False
        finally:
            self.is_loading = False


class GuestDashboard:
    """State of the guest list screen.

    The collection is only ever replaced by a full :meth:`refresh`;
    successful saves and deletes trigger one instead of patching
    :attr:`guests` locally.
    """

    def __init__(
        self,
        api: GuestListAPI,
        *,
        alert: AlertFn,
        confirm: ConfirmFn,
    ) -> None:
        self.api = api
        self.alert = alert
        self.confirm = confirm

        self.guests: List[Guest] = []
        self.is_loading = False
        self.error = ""

        self.is_modal_open = False
        self.editing_guest: Optional[Guest] = None
        self.is_saving = False

    @property
    def session(self) -> SessionManager:
        return self.api.session

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------
    def refresh(self) -> bool:
        """Reload the whole collection from the backend."""
        self.is_loading = True
        self.error = ""
        try:
            self.guests = self.api.list()
            return True
        except GuestListError as exc:
            self.error = exc.message
            return False
        finally:
            self.is_loading = False

    # ------------------------------------------------------------------
    # Add / edit modal
    # ------------------------------------------------------------------
    def open_modal(self, guest: Optional[Guest] = None) -> None:
        """Open the form, empty for a new guest or filled from ``guest``."""
        self.editing_guest = guest
        self.is_modal_open = True

    def close_modal(self) -> None:
        self.is_modal_open = False
        self.editing_guest = None

    def save_guest(self, nome: str, presenca: Optional[AttendanceStatus | str] = None) -> bool:
        """Submit the modal form.

        On success the modal closes and the list is reloaded.  On any
        failure an alert is raised and the modal stays open with its
        contents untouched.
        """
        if not nome.strip():
            self.alert(GuestValidationError.default_message)
            return False

        base = self.editing_guest
        update: dict = {"nome": nome}
        if presenca is not None:
            update["presenca"] = AttendanceStatus(presenca)
        if base is not None:
            guest = base.model_copy(update=update)
        else:
            guest = Guest(**update)

        self.is_saving = True
        try:
            self.api.save(guest)
        except GuestListError as exc:
            self.alert(f"Error: {exc.message}")
            return False
        finally:
            self.is_saving = False

        self.close_modal()
        self.refresh()
        return True

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------
    def delete_guest(self, guest: Guest) -> bool:
        """Delete ``guest`` after the user confirms; reload on success."""
        if not self.confirm(f'Are you sure you want to remove "{guest.nome}" from the list?'):
            logger.debug("Delete of guest %s cancelled", guest.convidado_id)
            return False
        try:
            self.api.delete(guest)
        except GuestListError as exc:
            self.alert(f"Error: {exc.message}")
            return False
        self.refresh()
        return True

    def logout(self) -> None:
        self.session.logout()


class AdminApp:
    """Top-level screen selection driven by the session.

    The app subscribes to the session: when it becomes authenticated the
    dashboard is loaded, and every change triggers ``render``.
    """

    def __init__(
        self,
        session: SessionManager,
        *,
        alert: AlertFn,
        confirm: ConfirmFn,
        render: Optional[RenderFn] = None,
        api: Optional[GuestListAPI] = None,
    ) -> None:
        self.session = session
        self.api = api or GuestListAPI(session)
        self.login_form = LoginForm(session)
        self.dashboard = GuestDashboard(self.api, alert=alert, confirm=confirm)
        self.render = render
        self._unsubscribe = session.subscribe(self._on_session_change)

    @property
    def view(self) -> str:
        return "dashboard" if self.session.is_authenticated else "login"

    def start(self) -> None:
        """Load the initial screen, the dashboard if a session was restored."""
        if self.session.is_authenticated:
            self.dashboard.refresh()
        self._render()

    def close(self) -> None:
        self._unsubscribe()

    def _on_session_change(self, token: Optional[str]) -> None:
        if token is not None:
            self.dashboard.refresh()
        else:
            self.dashboard.close_modal()
            self.dashboard.guests = []
        self._render()

    def _render(self) -> None:
        if self.render is not None:
            self.render(self)
