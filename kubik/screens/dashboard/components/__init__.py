"""Dashboard modals."""

from kubik.screens.dashboard.components.credentials_modal import CredentialsScreen
from kubik.screens.dashboard.components.namespace_modal import NamespaceSelectScreen

__all__ = ["CredentialsScreen", "NamespaceSelectScreen"]
