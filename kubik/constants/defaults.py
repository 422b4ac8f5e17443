"""Default values for settings.

All default values used in the AppSettings model.
"""

from typing import Final

from kubik.constants.timeouts import (
    AGE_REFRESH_INTERVAL,
    CLUSTER_REQUEST_TIMEOUT,
    LOG_RECONNECT_DELAY,
)
from kubik.constants.values import (
    DEBUG_BUFFER_LENGTH,
    LOG_BUFFER_LENGTH,
    LOG_TAIL_LINES,
)

# ============================================================================
# Stream defaults
# ============================================================================

LOG_TAIL_LINES_DEFAULT: Final = LOG_TAIL_LINES
LOG_RECONNECT_DELAY_DEFAULT: Final = LOG_RECONNECT_DELAY
AGE_REFRESH_INTERVAL_DEFAULT: Final = AGE_REFRESH_INTERVAL
REQUEST_TIMEOUT_DEFAULT: Final = CLUSTER_REQUEST_TIMEOUT
RELIST_ON_EXPIRED_WATCH_DEFAULT: Final = False

# ============================================================================
# Display defaults
# ============================================================================

LOG_BUFFER_LENGTH_DEFAULT: Final = LOG_BUFFER_LENGTH
DEBUG_BUFFER_LENGTH_DEFAULT: Final = DEBUG_BUFFER_LENGTH

# ============================================================================
# Authentication defaults
# ============================================================================

MAX_CREDENTIAL_PROMPTS_DEFAULT: Final = 3

__all__ = [
    "AGE_REFRESH_INTERVAL_DEFAULT",
    "DEBUG_BUFFER_LENGTH_DEFAULT",
    "LOG_BUFFER_LENGTH_DEFAULT",
    "LOG_RECONNECT_DELAY_DEFAULT",
    "LOG_TAIL_LINES_DEFAULT",
    "MAX_CREDENTIAL_PROMPTS_DEFAULT",
    "RELIST_ON_EXPIRED_WATCH_DEFAULT",
    "REQUEST_TIMEOUT_DEFAULT",
]
