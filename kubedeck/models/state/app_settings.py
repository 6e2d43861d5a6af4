"""Application settings models."""

from pydantic import BaseModel, ConfigDict, Field

from kubedeck.constants.defaults import (
    API_BASE_DEFAULT,
    FILTER_HISTORY_MAX_DEFAULT,
    KUBECTL_CMD_DEFAULT,
    LOG_SINCE_DEFAULT,
    NAMESPACE_ALL,
)
from kubedeck.constants.timeouts import API_REQUEST_TIMEOUT


class KubectlCommandSettings(BaseModel):
    """Base command whose defaults are prepended to every kubectl call."""

    cmd: str = KUBECTL_CMD_DEFAULT
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)


class LogSettings(BaseModel):
    """Log view preferences."""

    since: str = LOG_SINCE_DEFAULT


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True)

    # Cluster access
    kubectl_cmd: KubectlCommandSettings = Field(default_factory=KubectlCommandSettings)
    namespace: str = NAMESPACE_ALL
    context: str = ""
    api_base: str = API_BASE_DEFAULT
    auto_proxy: bool = True
    request_timeout: float = API_REQUEST_TIMEOUT

    # Views
    logs: LogSettings = Field(default_factory=LogSettings)
    headers: bool = True
    filter_history_max: int = FILTER_HISTORY_MAX_DEFAULT

    # External programs
    terminal_cmd: str = ""
    editor: str = ""


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""
