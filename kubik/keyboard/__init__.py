"""Keyboard bindings module.

- app: App-level bindings (APP_BINDINGS) and modal bindings (MODAL_BINDINGS)
"""

from kubik.keyboard.app import APP_BINDINGS, MODAL_BINDINGS

__all__ = [
    "APP_BINDINGS",
    "MODAL_BINDINGS",
]
