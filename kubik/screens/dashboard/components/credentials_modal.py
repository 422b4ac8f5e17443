"""Credentials prompt used by the OAuth login flow."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from kubik.keyboard import MODAL_BINDINGS
from kubik.models.core.request import Credentials


class CredentialsScreen(ModalScreen[Credentials | None]):
    """Username/password form; dismisses with Credentials, or None when cancelled."""

    BINDINGS = MODAL_BINDINGS

    DEFAULT_CSS = """
    CredentialsScreen {
        align: center middle;
    }

    #credentials-shell {
        width: 56;
        height: auto;
        border: round $primary;
        background: $surface;
        padding: 0 1;
    }

    #credentials-title {
        text-style: bold;
        margin-bottom: 1;
    }

    .credentials-row {
        height: auto;
    }

    .credentials-row Label {
        width: 11;
        padding-top: 1;
    }

    .credentials-row Input {
        width: 1fr;
    }

    #credentials-actions {
        height: auto;
        align-horizontal: right;
    }
    """

    def __init__(self, server: str, username: str = "") -> None:
        super().__init__()
        self._server = server
        self._username = username

    def compose(self) -> ComposeResult:
        with Container(id="credentials-shell"):
            yield Static(f"Log in to {self._server}", id="credentials-title", markup=False)
            with Horizontal(classes="credentials-row"):
                yield Label("username:")
                yield Input(value=self._username, id="credentials-username")
            with Horizontal(classes="credentials-row"):
                yield Label("password:")
                yield Input(password=True, id="credentials-password")
            with Horizontal(id="credentials-actions"):
                yield Button("Log In", id="credentials-submit", variant="primary")

    def on_mount(self) -> None:
        target = "#credentials-password" if self._username else "#credentials-username"
        self.query_one(target, Input).focus()

    def _submit(self) -> None:
        username = self.query_one("#credentials-username", Input).value.strip()
        password = self.query_one("#credentials-password", Input).value
        if not username:
            self.query_one("#credentials-username", Input).focus()
            return
        self.dismiss(Credentials(username=username, password=password))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        if event.input.id == "credentials-username":
            self.query_one("#credentials-password", Input).focus()
            return
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "credentials-submit":
            self._submit()

    def action_cancel(self) -> None:
        self.dismiss(None)
