"""Screens for the Kubik dashboard."""

from kubik.screens.dashboard import (
    CredentialsScreen,
    DashboardScreen,
    NamespaceSelectScreen,
    PodSelected,
)

__all__ = [
    "CredentialsScreen",
    "DashboardScreen",
    "NamespaceSelectScreen",
    "PodSelected",
]
