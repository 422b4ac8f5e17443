"""Dashboard screen configuration - column definitions, widget IDs and styles."""

from __future__ import annotations

# =============================================================================
# Table Column Definitions: list[tuple[str, int]] = [(name, width), ...]
# =============================================================================

POD_TABLE_COLUMNS: list[tuple[str, int]] = [
    ("NAME", 48),
    ("STATUS", 12),
    ("AGE", 10),
]

# =============================================================================
# Widget IDs
# =============================================================================

PODS_TABLE_ID = "pods-table"
POD_LOG_ID = "pod-log"
DEBUG_LOG_ID = "debug-log"
DASHBOARD_BODY_ID = "dashboard-body"

PODS_PANEL_TITLE = "Pods"
DEBUG_PANEL_TITLE = "Debug"

# =============================================================================
# Styles
# =============================================================================

SELECTED_POD_STYLE = "bold blue"
POD_NAME_STYLE = "grey50"
MARKER_STYLE = "red"

# Phase colors for the STATUS column; other phases use the default style.
PHASE_STYLES: dict[str, str] = {
    "Running": "green",
    "Succeeded": "green",
    "Pending": "yellow",
    "Failed": "red",
    "Unknown": "dim",
}
