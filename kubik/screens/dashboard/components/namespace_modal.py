"""Namespace selection modal."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option

from kubik.keyboard import MODAL_BINDINGS
from kubik.screens.dashboard.config import SELECTED_POD_STYLE


class NamespaceSelectScreen(ModalScreen[str | None]):
    """Lists namespaces and dismisses with the chosen one, or None."""

    BINDINGS = MODAL_BINDINGS

    DEFAULT_CSS = """
    NamespaceSelectScreen {
        align: center middle;
    }

    #namespace-modal-shell {
        width: 50;
        height: auto;
        max-height: 80%;
        border: round $primary;
        background: $surface;
        padding: 0 1;
    }

    #namespace-modal-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #namespace-list {
        height: auto;
        max-height: 30;
    }
    """

    def __init__(self, namespaces: list[str], current: str) -> None:
        super().__init__()
        self._namespaces = namespaces
        self._current = current

    def compose(self) -> ComposeResult:
        with Container(id="namespace-modal-shell"):
            yield Static("Namespaces", id="namespace-modal-title")
            if not self._namespaces:
                yield Static("No accessible namespaces", id="namespace-modal-empty")
            yield OptionList(
                *(
                    Option(
                        Text(name, style=SELECTED_POD_STYLE if name == self._current else ""),
                        id=name,
                    )
                    for name in self._namespaces
                ),
                id="namespace-list",
            )

    def on_mount(self) -> None:
        option_list = self.query_one("#namespace-list", OptionList)
        if self._current in self._namespaces:
            option_list.highlighted = self._namespaces.index(self._current)
        option_list.focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.dismiss(event.option.id)

    def action_cancel(self) -> None:
        self.dismiss(None)
