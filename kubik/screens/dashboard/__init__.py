"""Dashboard screen module."""

from kubik.screens.dashboard.components import CredentialsScreen, NamespaceSelectScreen
from kubik.screens.dashboard.dashboard_screen import DashboardScreen, PodSelected
from kubik.screens.dashboard.presenter import DashboardPresenter

__all__ = [
    "CredentialsScreen",
    "DashboardPresenter",
    "DashboardScreen",
    "NamespaceSelectScreen",
    "PodSelected",
]
