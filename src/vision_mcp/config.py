"""Server configuration loaded from environment variables with sensible defaults."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass


def _get_env_str(key: str, default: str) -> str:
    """Get a non-empty string from an environment variable."""
    raw: str = os.environ.get(key, "").strip()
    return raw or default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get a boolean from an environment variable."""
    raw: str = os.environ.get(key, "")
    if not raw:
        return default
    return raw.lower() in ("true", "1", "yes")


def _get_env_log_level(key: str, default: int) -> int:
    """Get a logging level from an environment variable (name or number)."""
    raw: str = os.environ.get(key, "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level: object = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    """Snapshot of the server configuration."""

    # Directory for captures written without an explicit path
    output_dir: str
    log_level: int = logging.INFO
    skip_permission_check: bool = False


def load_settings() -> Settings:
    """Read the current environment into a Settings snapshot."""
    return Settings(
        output_dir=os.path.abspath(
            _get_env_str("VISION_MCP_OUTPUT_DIR", tempfile.gettempdir())
        ),
        log_level=_get_env_log_level("VISION_MCP_LOG_LEVEL", logging.INFO),
        skip_permission_check=_get_env_bool("VISION_MCP_SKIP_PERMISSION_CHECK", False),
    )
