"""The admin client driven against the development backend."""

import io

import pytest

from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD, BASE_URL, BackendAdapter, http_with
from wedding_guests.client.console import EXIT_AUTH_REQUIRED, EXIT_ERROR, EXIT_OK, format_guest, main
from wedding_guests.client.dashboard import AdminApp
from wedding_guests.client.errors import AuthenticationError, FetchError
from wedding_guests.client.guests import GuestListAPI
from wedding_guests.client.session import SessionManager
from wedding_guests.client.token_store import TokenStore
from wedding_guests.core.config import Settings
from wedding_guests.schemas.guest import AttendanceStatus, Guest


@pytest.fixture(name="remote")
def remote_fixture(store: TokenStore, backend: BackendAdapter) -> SessionManager:
    return SessionManager(base_url=BASE_URL, store=store, http=http_with(backend))


class TestClientAgainstBackend:
    def test_full_flow(self, remote: SessionManager, store: TokenStore):
        remote.login(ADMIN_EMAIL, ADMIN_PASSWORD)
        assert store.get("authToken") == remote.token

        api = GuestListAPI(remote)
        api.save(Guest(nome="Ana"))
        api.save(Guest(nome="Bia", presenca="vai"))

        ana, bia = api.list()
        assert ana.presenca is AttendanceStatus.UNCONFIRMED
        assert bia.presenca is AttendanceStatus.ATTENDING

        api.save(ana.model_copy(update={"presenca": AttendanceStatus.NOT_ATTENDING}))
        api.delete(bia)

        guests = api.list()
        assert [(g.nome, g.presenca) for g in guests] == [("Ana", AttendanceStatus.NOT_ATTENDING)]

    def test_rejected_login(self, remote: SessionManager, store: TokenStore):
        with pytest.raises(AuthenticationError) as excinfo:
            remote.login(ADMIN_EMAIL, "wrong")
        assert excinfo.value.message == "Incorrect email or password"
        assert store.get("authToken") is None

    def test_stale_token_is_discarded(self, store: TokenStore, backend: BackendAdapter):
        store.set("authToken", "stale.token.value")
        session = SessionManager(base_url=BASE_URL, store=store, http=http_with(backend))
        assert session.is_authenticated

        with pytest.raises(FetchError):
            GuestListAPI(session).list()

        assert not session.is_authenticated
        assert store.get("authToken") is None

    def test_dashboard_flow(self, remote: SessionManager, backend: BackendAdapter):
        alerts = []
        app = AdminApp(remote, alert=alerts.append, confirm=lambda message: True)
        app.start()
        assert app.view == "login"

        assert app.login_form.submit(ADMIN_EMAIL, ADMIN_PASSWORD)
        assert app.view == "dashboard"

        app.dashboard.open_modal()
        assert app.dashboard.save_guest("Ana")
        assert [g.nome for g in app.dashboard.guests] == ["Ana"]

        app.dashboard.open_modal(app.dashboard.guests[0])
        assert app.dashboard.save_guest("Ana Souza", "vai")
        assert app.dashboard.guests[0].nome == "Ana Souza"

        assert app.dashboard.delete_guest(app.dashboard.guests[0])
        assert app.dashboard.guests == []
        assert alerts == []
        assert backend.calls[-2:] == [("DELETE", "/convidados/1"), ("GET", "/convidados")]


class TestConsole:
    @pytest.fixture(name="config")
    def config_fixture(self, token_file) -> Settings:
        return Settings(backend_url=BASE_URL, token_file=str(token_file), log_level="WARNING")

    def run(self, config, backend, *argv):
        return main(list(argv), config=config, http=http_with(backend))

    def test_commands(self, config: Settings, backend: BackendAdapter, store: TokenStore, capsys):
        assert self.run(config, backend, "list") == EXIT_AUTH_REQUIRED

        assert self.run(config, backend, "login", "--email", ADMIN_EMAIL, "--password", ADMIN_PASSWORD) == EXIT_OK
        assert store.get("authToken")

        assert self.run(config, backend, "add", "Ana") == EXIT_OK
        assert self.run(config, backend, "add", "  ") == EXIT_ERROR

        capsys.readouterr()
        assert self.run(config, backend, "list") == EXIT_OK
        out = capsys.readouterr().out
        assert "Ana" in out
        assert "Pending" in out

        assert self.run(config, backend, "edit", "1", "--status", "vai") == EXIT_OK
        assert self.run(config, backend, "edit", "99", "--name", "Nobody") == EXIT_ERROR
        assert self.run(config, backend, "delete", "1", "--yes") == EXIT_OK

        capsys.readouterr()
        self.run(config, backend, "list")
        assert "No guests on the list yet." in capsys.readouterr().out

        assert self.run(config, backend, "logout") == EXIT_OK
        assert store.get("authToken") is None

    def test_failed_login(self, config: Settings, backend: BackendAdapter, capsys):
        code = self.run(config, backend, "login", "--email", ADMIN_EMAIL, "--password", "wrong")
        assert code == EXIT_ERROR
        assert "Incorrect email or password" in capsys.readouterr().out

    def test_shell(self, config: Settings, backend: BackendAdapter, store: TokenStore):
        from wedding_guests.client.console import GuestAdminConsole

        script = "\n".join([
            "list",
            f"login {ADMIN_EMAIL}",
            "add Ana Souza",
            "edit 1 --status nao_vai",
            "delete 1",
            "y",
            "list",
            "quit",
        ]) + "\n"
        stdout = io.StringIO()
        session = SessionManager.from_settings(config, http=http_with(backend))
        console = GuestAdminConsole(
            session,
            stdin=io.StringIO(script),
            stdout=stdout,
            password_prompt=lambda prompt: ADMIN_PASSWORD,
        )

        assert console.run_shell() == EXIT_OK

        out = stdout.getvalue()
        assert "Not logged in." in out
        assert f"Logged in as {ADMIN_EMAIL}." in out
        assert "Added Ana Souza." in out
        assert "Updated guest 1." in out
        assert 'Are you sure you want to remove "Ana Souza" from the list?' in out
        assert "Removed Ana Souza." in out
        assert "No guests on the list yet." in out
        assert store.get("authToken")

    def test_shell_edit_without_id(self, config: Settings, backend: BackendAdapter):
        from wedding_guests.client.console import GuestAdminConsole

        stdout = io.StringIO()
        session = SessionManager.from_settings(config, http=http_with(backend))
        console = GuestAdminConsole(
            session,
            stdin=io.StringIO(f"login {ADMIN_EMAIL}\nedit --status vai\nquit\n"),
            stdout=stdout,
            password_prompt=lambda prompt: ADMIN_PASSWORD,
        )

        assert console.run_shell() == EXIT_OK
        assert "Usage: edit ID [NAME] [--status S]" in stdout.getvalue()
        assert not any(method == "PUT" for method, _ in backend.calls)


def test_format_guest_shows_unknown_status_as_sent():
    guest = Guest.model_validate({"convidado_id": 4, "nome": "Bia", "presenca": "talvez"})
    assert format_guest(guest).split()[-1] == "talvez"
    assert format_guest(Guest(convidado_id=5, nome="Ana")).endswith("Pending")
