"""Application settings models."""

from pydantic import BaseModel, ConfigDict, Field

from kubik.constants.defaults import (
    AGE_REFRESH_INTERVAL_DEFAULT,
    DEBUG_BUFFER_LENGTH_DEFAULT,
    LOG_BUFFER_LENGTH_DEFAULT,
    LOG_RECONNECT_DELAY_DEFAULT,
    LOG_TAIL_LINES_DEFAULT,
    MAX_CREDENTIAL_PROMPTS_DEFAULT,
    RELIST_ON_EXPIRED_WATCH_DEFAULT,
    REQUEST_TIMEOUT_DEFAULT,
)


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True)

    # Streams
    log_tail_lines: int = Field(default=LOG_TAIL_LINES_DEFAULT, ge=1)
    log_reconnect_delay: float = Field(default=LOG_RECONNECT_DELAY_DEFAULT, ge=0)
    age_refresh_interval: float = Field(default=AGE_REFRESH_INTERVAL_DEFAULT, gt=0)
    request_timeout: float = Field(default=REQUEST_TIMEOUT_DEFAULT, gt=0)
    # Re-list instead of re-watching when the server reports an expired version
    relist_on_expired_watch: bool = RELIST_ON_EXPIRED_WATCH_DEFAULT

    # Display
    log_buffer_length: int = Field(default=LOG_BUFFER_LENGTH_DEFAULT, ge=1)
    debug_buffer_length: int = Field(default=DEBUG_BUFFER_LENGTH_DEFAULT, ge=1)

    # Authentication
    max_credential_prompts: int = Field(default=MAX_CREDENTIAL_PROMPTS_DEFAULT, ge=1)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""
