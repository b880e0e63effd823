"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import TaskboardConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per process
_config_cache: TaskboardConfig | None = None

_TRUE_VALUES = ("1", "true", "yes", "on")


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/taskboard/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "taskboard" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .taskboard.json in the project root
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".taskboard.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`.
    Nested dicts are merged, not replaced.

    Example:
        >>> base = {"a": 1, "b": {"x": 10, "y": 20}}
        >>> override = {"b": {"y": 30, "z": 40}, "c": 3}
        >>> deep_merge(base, override)
        {'a': 1, 'b': {'x': 10, 'y': 30, 'z': 40}, 'c': 3}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def _set(result: dict[str, Any], section: str, key: str, value: Any) -> None:
    result[section] = {**result.get(section, {}), key: value}


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Env vars have the highest precedence and override all config files.

    Supported env vars:
        TASKBOARD_HOST - overrides server.host
        TASKBOARD_PORT - overrides server.port
        TASKBOARD_METRICS_PATH - overrides telemetry.csv_path ("" disables it)
        TASKBOARD_TELEMETRY_ENABLED - overrides telemetry.enabled
        TASKBOARD_VALIDATE_EDITS - overrides validation.validate_edits

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if host := os.environ.get("TASKBOARD_HOST"):
        _set(result, "server", "host", host)

    if port_str := os.environ.get("TASKBOARD_PORT"):
        try:
            _set(result, "server", "port", int(port_str))
        except ValueError:
            logger.warning("Invalid TASKBOARD_PORT value '%s', ignoring", port_str)

    if "TASKBOARD_METRICS_PATH" in os.environ:
        _set(result, "telemetry", "csv_path", os.environ["TASKBOARD_METRICS_PATH"])

    if enabled_str := os.environ.get("TASKBOARD_TELEMETRY_ENABLED"):
        _set(result, "telemetry", "enabled", enabled_str.lower() in _TRUE_VALUES)

    if strict_str := os.environ.get("TASKBOARD_VALIDATE_EDITS"):
        _set(result, "validation", "validate_edits", strict_str.lower() in _TRUE_VALUES)

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "server": {"host": "127.0.0.1", "port": 8080},
        "telemetry": {"enabled": True, "csv_path": "data/metrics.csv"},
        "validation": {"validate_edits": False},
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> TaskboardConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (TASKBOARD_*)
        2. Project config (.taskboard.json)
        3. User config (~/.config/taskboard/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Project directory to load .taskboard.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated TaskboardConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = TaskboardConfig(**merged)
    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
