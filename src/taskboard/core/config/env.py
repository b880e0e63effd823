"""
Load .env files into the process environment.

Two files are read, and a variable already exported in the shell always wins:
the project ``.env`` beats the user's ``$XDG_CONFIG_HOME/taskboard/.env``.
"""

import logging
import os
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


def get_user_env_path() -> Path:
    xdg_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(xdg_home) / "taskboard" / ".env"


def load_layered_env(*, project_dir: Path | None = None, user_env: Path | None = None) -> None:
    """Export the user and project .env files, without touching shell variables.

    Args:
        project_dir: Directory holding the project .env (defaults to cwd)
        user_env: User .env file (defaults to get_user_env_path())
    """
    merged: dict[str, str] = {}
    for path in (user_env or get_user_env_path(), (project_dir or Path.cwd()) / ".env"):
        if path.is_file():
            logger.debug("Loading environment from %s", path)
            merged.update({k: v for k, v in dotenv_values(path).items() if v is not None})

    for key, value in merged.items():
        os.environ.setdefault(key, value)
