"""Terminal front end for the wedding guest list admin.

Runs either one command and exits, or an interactive shell when no
command is given::

    guest-admin login --email admin@example.com
    guest-admin list
    guest-admin add "Ana Souza"
    guest-admin edit 7 --status vai
    guest-admin delete 7
    guest-admin            # interactive shell

The backend URL, token file and log level come from the environment
(see :mod:`wedding_guests.core.config`) and can be overridden with
``--base-url``, ``--token-file`` and ``--log-level``.  The session token
is kept in the token file between runs until ``logout`` or until the
backend rejects it.
"""

from __future__ import annotations

import argparse
import getpass
import logging
import shlex
import sys
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Sequence, TextIO

from ..core.config import Settings, settings as default_settings
from ..core.logging_config import setup_logging
from ..schemas.guest import AttendanceStatus, Guest
from .dashboard import AdminApp
from .session import SessionManager

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_AUTH_REQUIRED = 2

STATUS_CHOICES = [status.value for status in AttendanceStatus]


def format_guest(guest: Guest) -> str:
    return f"{str(guest.convidado_id):>6}  {guest.nome:<40}  {guest.status_label}"


class GuestAdminConsole:
    """Drives an :class:`AdminApp` from a terminal."""

    def __init__(
        self,
        session: SessionManager,
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        password_prompt: Callable[[str], str] = getpass.getpass,
    ) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.password_prompt = password_prompt
        self.assume_yes = False
        self.app = AdminApp(session, alert=self.alert, confirm=self.confirm)

    @property
    def session(self) -> SessionManager:
        return self.app.session

    @property
    def dashboard(self):
        return self.app.dashboard

    # ------------------------------------------------------------------
    # Terminal helpers
    # ------------------------------------------------------------------
    def echo(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def prompt(self, text: str) -> str:
        self.stdout.write(text)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.rstrip("\n")

    def alert(self, message: str) -> None:
        self.echo(f"!! {message}")

    def confirm(self, message: str) -> bool:
        if self.assume_yes:
            return True
        try:
            answer = self.prompt(f"{message} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in {"y", "yes"}

    def show_guests(self) -> None:
        if self.dashboard.error:
            self.echo(self.dashboard.error)
            return
        if not self.dashboard.guests:
            self.echo("No guests on the list yet.")
            return
        for guest in self.dashboard.guests:
            self.echo(format_guest(guest))

    def _find_guest(self, guest_id: str) -> Optional[Guest]:
        for guest in self.dashboard.guests:
            if str(guest.convidado_id) == guest_id:
                return guest
        return None

    def _require_session(self) -> bool:
        if self.session.is_authenticated:
            return True
        self.echo("Not logged in. Run 'login' first.")
        return False

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def do_login(self, email: Optional[str], password: Optional[str]) -> int:
        if not email:
            email = self.prompt("Email: ").strip()
        if password is None:
            password = self.password_prompt("Password: ")
        form = self.app.login_form
        if not form.submit(email, password):
            self.echo(form.error)
            return EXIT_ERROR
        self.echo(f"Logged in as {email}.")
        return EXIT_OK

    def do_logout(self) -> int:
        self.dashboard.logout()
        self.echo("Logged out.")
        return EXIT_OK

    def do_list(self) -> int:
        if not self._require_session():
            return EXIT_AUTH_REQUIRED
        ok = self.dashboard.refresh()
        self.show_guests()
        if not ok:
            return EXIT_ERROR if self.session.is_authenticated else EXIT_AUTH_REQUIRED
        return EXIT_OK

    def do_add(self, name: str) -> int:
        if not self._require_session():
            return EXIT_AUTH_REQUIRED
        self.dashboard.open_modal()
        if not self.dashboard.save_guest(name):
            self.dashboard.close_modal()
            return self._failure_code()
        self.echo(f"Added {name.strip()}.")
        return EXIT_OK

    def do_edit(self, guest_id: str, name: Optional[str], status: Optional[str]) -> int:
        if not self._require_session():
            return EXIT_AUTH_REQUIRED
        if not self.dashboard.refresh():
            self.show_guests()
            return self._failure_code()
        guest = self._find_guest(guest_id)
        if guest is None:
            self.echo(f"No guest with ID {guest_id}.")
            return EXIT_ERROR
        self.dashboard.open_modal(guest)
        if not self.dashboard.save_guest(name if name is not None else guest.nome, status):
            self.dashboard.close_modal()
            return self._failure_code()
        self.echo(f"Updated guest {guest_id}.")
        return EXIT_OK

    def do_delete(self, guest_id: str) -> int:
        if not self._require_session():
            return EXIT_AUTH_REQUIRED
        if not self.dashboard.refresh():
            self.show_guests()
            return self._failure_code()
        guest = self._find_guest(guest_id)
        if guest is None:
            self.echo(f"No guest with ID {guest_id}.")
            return EXIT_ERROR
        if not self.dashboard.delete_guest(guest):
            return self._failure_code()
        self.echo(f"Removed {guest.nome}.")
        return EXIT_OK

    def _failure_code(self) -> int:
        return EXIT_ERROR if self.session.is_authenticated else EXIT_AUTH_REQUIRED

    # ------------------------------------------------------------------
    # Interactive shell
    # ------------------------------------------------------------------
    SHELL_HELP = (
        "Commands:\n"
        "  login [EMAIL]                 log in (password is prompted)\n"
        "  logout                        forget the stored session\n"
        "  list                          reload and show the guest list\n"
        "  add NAME                      add a guest\n"
        "  edit ID [NAME] [--status S]   rename a guest or change attendance\n"
        "  delete ID                     remove a guest (asks first)\n"
        "  help                          show this message\n"
        "  quit                          leave the shell\n"
        f"Attendance statuses: {', '.join(STATUS_CHOICES)}"
    )

    def _dispatch(self, argv: List[str]) -> bool:
        """Run one shell line; returns False when the shell should exit."""
        command, args = argv[0].lower(), argv[1:]
        if command in {"quit", "exit"}:
            return False
        if command == "help":
            self.echo(self.SHELL_HELP)
        elif command == "login":
            self.do_login(args[0] if args else None, None)
        elif command == "logout":
            self.do_logout()
        elif command == "list":
            self.do_list()
        elif command == "add" and args:
            self.do_add(" ".join(args))
        elif command == "edit" and args:
            status = None
            if "--status" in args:
                idx = args.index("--status")
                if idx + 1 >= len(args) or args[idx + 1] not in STATUS_CHOICES:
                    self.echo(f"--status must be one of: {', '.join(STATUS_CHOICES)}")
                    return True
                status = args[idx + 1]
                args = args[:idx] + args[idx + 2:]
            if not args:
                self.echo("Usage: edit ID [NAME] [--status S]")
                return True
            name = " ".join(args[1:]) or None
            self.do_edit(args[0], name, status)
        elif command == "delete" and args:
            self.do_delete(args[0])
        else:
            self.echo("Unknown command or missing argument. Type 'help'.")
        return True

    def run_shell(self) -> int:
        """Read commands until ``quit`` or end of input."""
        self.echo("Wedding guest list admin. Type 'help' for commands.")
        self.app.start()
        if self.session.is_authenticated:
            self.show_guests()
        else:
            self.echo("Not logged in.")
        while True:
            try:
                line = self.prompt("guests> ")
            except (EOFError, KeyboardInterrupt):
                self.echo()
                break
            try:
                argv = shlex.split(line)
            except ValueError as exc:
                self.echo(f"Could not parse command: {exc}")
                continue
            if not argv:
                continue
            if not self._dispatch(argv):
                break
        self.app.close()
        return EXIT_OK


# ----------------------------------------------------------------------
# Entry point
# ----------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="guest-admin", description="Manage the wedding guest list.")
    ap.add_argument("--base-url", help="Backend base URL (default: $GUEST_LIST_BACKEND_URL)")
    ap.add_argument("--token-file", help="Where the session token is stored (default: $GUEST_LIST_TOKEN_FILE)")
    ap.add_argument("--log-level", help="Logging level (default: $LOG_LEVEL)")

    sub = ap.add_subparsers(dest="command")

    login = sub.add_parser("login", help="Log in and store the session token")
    login.add_argument("--email")
    login.add_argument("--password", help="If omitted, you'll be prompted securely.")

    sub.add_parser("logout", help="Forget the stored session token")
    sub.add_parser("list", help="Show the guest list")

    add = sub.add_parser("add", help="Add a guest")
    add.add_argument("name")

    edit = sub.add_parser("edit", help="Rename a guest or change attendance")
    edit.add_argument("id")
    edit.add_argument("--name")
    edit.add_argument("--status", choices=STATUS_CHOICES)

    delete = sub.add_parser("delete", help="Remove a guest")
    delete.add_argument("id")
    delete.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    sub.add_parser("shell", help="Interactive shell (default)")
    return ap


def main(argv: Optional[Sequence[str]] = None, *, config: Optional[Settings] = None, http=None) -> int:
    args = build_parser().parse_args(argv)

    overrides: Dict[str, str] = {}
    if args.base_url:
        overrides["backend_url"] = args.base_url
    if args.token_file:
        overrides["token_file"] = args.token_file
    if args.log_level:
        overrides["log_level"] = args.log_level
    cfg = replace(config or default_settings, **overrides)

    setup_logging(cfg.log_level, cfg.log_file or None)
    session = SessionManager.from_settings(cfg, http=http)
    console = GuestAdminConsole(session)

    command = args.command or "shell"
    logger.debug("Running %s against %s", command, cfg.backend_url)
    if command == "login":
        return console.do_login(args.email, args.password)
    if command == "logout":
        return console.do_logout()
    if command == "list":
        return console.do_list()
    if command == "add":
        return console.do_add(args.name)
    if command == "edit":
        return console.do_edit(args.id, args.name, args.status)
    if command == "delete":
        console.assume_yes = args.yes
        return console.do_delete(args.id)
    return console.run_shell()


if __name__ == "__main__":
    sys.exit(main())
