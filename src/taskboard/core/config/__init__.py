"""
Configuration models and loading.

This module provides Pydantic models for taskboard configuration
with multi-layer merging: defaults < user < project < env vars.
"""

from .loader import (
    clear_cache,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import (
    ClientConfig,
    ServerConfig,
    TaskboardConfig,
    TelemetryConfig,
    ValidationConfig,
)

__all__ = [
    # Models
    "ClientConfig",
    "ServerConfig",
    "TaskboardConfig",
    "TelemetryConfig",
    "ValidationConfig",
    # Loader functions
    "clear_cache",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
]
