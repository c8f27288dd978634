"""Screen Recording permission check run once at startup."""

from __future__ import annotations

import logging
import sys

from .errors import PermissionDeniedError

logger = logging.getLogger(__name__)

_MACOS_INSTRUCTIONS: str = (
    "Screen Recording permission required. To enable:\n"
    "  1. Open System Settings\n"
    "  2. Go to Privacy & Security > Screen Recording\n"
    "  3. Enable permission for this app\n"
    "  4. Restart the MCP server"
)


def has_screen_capture_permission(platform: str | None = None) -> bool:
    """Return True if this process may read other windows' pixels."""
    platform = platform or sys.platform
    if platform != "darwin":
        return True

    import Quartz

    # Preflight exists from macOS 10.15; earlier systems have no such gate
    preflight = getattr(Quartz, "CGPreflightScreenCaptureAccess", None)
    if preflight is None:
        return True
    return bool(preflight())


def check_permissions(platform: str | None = None) -> None:
    """Raise PermissionDeniedError unless screen capture is allowed."""
    if not has_screen_capture_permission(platform):
        logger.error(_MACOS_INSTRUCTIONS)
        raise PermissionDeniedError("Screen Recording permission not granted")
    logger.info("Screen Recording permission granted")
