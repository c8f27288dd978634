"""Vision MCP Server - window and display capture for MCP clients."""

from __future__ import annotations

import json
import logging
import signal
import sys
from collections.abc import Mapping
from types import FrameType
from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent

from .config import Settings, load_settings
from .errors import PermissionDeniedError
from .permissions import check_permissions
from .tools import ToolHandlers
from .types import (
    CaptureDisplayResult,
    CaptureMode,
    CaptureWindowResult,
    CaptureWindowsResult,
    ListWindowsResult,
)

LOG_FORMAT: str = "%(asctime)s [vision-mcp] %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("vision_mcp")

mcp: FastMCP = FastMCP("Vision", instructions="Window and display capture MCP Server")

handlers: ToolHandlers = ToolHandlers(load_settings(), logger.getChild("tools"))


@mcp.tool()
def list_windows() -> ListWindowsResult:
    """Get all open windows with metadata (title, app, bounds, display).

    Use the returned window ids with capture_window or capture_windows.
    """
    return handlers.list_windows()


@mcp.tool()
def capture_window(
    window_id: str,
    mode: CaptureMode = "full",
    output_path: str | None = None,
) -> CaptureWindowResult:
    """Capture a screenshot of a specific window by ID and save it as PNG.

    Args:
        window_id: Window ID from list_windows
        mode: Capture mode: full window or content only (default: full)
        output_path: Custom output path ending in .png (default: temp directory)
    """
    return handlers.capture_window(window_id, mode, output_path)


@mcp.tool()
def capture_windows(
    window_ids: list[str],
    mode: CaptureMode = "full",
    output_dir: str | None = None,
) -> CaptureWindowsResult:
    """Capture screenshots of multiple windows by their IDs.
    Use this when you need to see multiple windows at once. Windows that
    cannot be captured are reported per item without failing the others.

    Args:
        window_ids: Window IDs from list_windows (at least one)
        mode: Capture mode: full window or content only (default: full)
        output_dir: Custom output directory (default: temp directory)
    """
    return handlers.capture_windows(window_ids, mode, output_dir)


@mcp.tool()
def capture_display(
    display_id: int | None = None,
) -> Annotated[CallToolResult, CaptureDisplayResult]:
    """Capture a screenshot of entire display(s) and save it as PNG.

    Args:
        display_id: Display number (0-indexed), or omit to capture all displays
    """
    return tool_result(handlers.capture_display(display_id))


def tool_result(payload: Mapping[str, Any]) -> CallToolResult:
    """Render payload as JSON text and as structured content.

    Keys the payload leaves unset are absent from both forms.
    """
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(payload, indent=2))],
        structuredContent=dict(payload),
    )


def configure_logging(level: int) -> None:
    """Send log records to stderr; stdout carries the MCP stdio stream."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def handle_sigterm(signum: int, frame: FrameType | None) -> None:
    """Exit cleanly when the host terminates the server."""
    logger.info("Shutting down...")
    sys.exit(0)


def main() -> None:
    """Start the Vision MCP server over stdio."""
    settings: Settings = load_settings()
    configure_logging(settings.log_level)
    handlers.settings = settings
    signal.signal(signal.SIGTERM, handle_sigterm)

    try:
        if not settings.skip_permission_check:
            check_permissions()
        logger.info("Server starting (output dir: %s)", settings.output_dir)
        mcp.run(transport="stdio")
    except PermissionDeniedError as e:
        logger.error("Fatal error: %s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
