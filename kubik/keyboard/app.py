"""App-level keyboard bindings.

This module contains Textual Binding objects for app-level bindings
that work from any screen.
"""

from textual.binding import Binding

# ============================================================================
# Textual Binding objects for app-level bindings
# ============================================================================

APP_BINDINGS: list[Binding] = [
    Binding("n", "select_namespace", "Namespace"),
    Binding("l", "login", "Log In"),
    Binding("ctrl+l", "login", "Log In", show=False),
    Binding("d", "toggle_debug", "Debug"),
    Binding("q", "quit", "Quit"),
    Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
]

# ============================================================================
# Modal bindings
# ============================================================================

MODAL_BINDINGS: list[Binding] = [
    Binding("escape", "cancel", "Cancel"),
]

__all__ = [
    "APP_BINDINGS",
    "MODAL_BINDINGS",
]
