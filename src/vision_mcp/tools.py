"""Tool handlers: list and capture windows and displays.

Handlers translate one tool call into backend calls, write PNG files and
shape the JSON envelope. Failures leave a handler only as protocol errors
produced by :func:`vision_mcp.errors.normalize_error`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from PIL import Image as PILImage

from .backend import WindowBackend, get_backend
from .config import Settings
from .errors import (
    WindowNotFoundError,
    error_message,
    internal_error,
    invalid_request,
    normalize_error,
)
from .output import resolve_output_dir, resolve_output_file, write_png
from .screenshot import capture_monitor, list_monitors
from .types import (
    CaptureDisplayResult,
    CaptureMode,
    CaptureWindowResult,
    CaptureWindowsResult,
    DisplayCapture,
    ListWindowsResult,
    MonitorInfo,
    NativeWindow,
    RawWindow,
    WindowCaptureItem,
    WindowInfo,
)
from .window_manager import filter_windows, find_by_id, window_metadata


def screenshot_filename(window_id: str) -> str:
    return f"screenshot_{window_id}.png"


def display_filename(display: int) -> str:
    return f"display_{display}.png"


class ToolHandlers:
    """The four tools, bound to their collaborators.

    Args:
        settings: Server configuration (default output directory).
        logger: Logger for this handler set.
        backend_factory: Returns the platform window backend.
        monitor_lister: Returns the physical monitors in display order.
        monitor_capturer: Captures one monitor as an image.
    """

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        backend_factory: Callable[[], WindowBackend] = get_backend,
        monitor_lister: Callable[[], list[MonitorInfo]] = list_monitors,
        monitor_capturer: Callable[[MonitorInfo], PILImage.Image] = capture_monitor,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._backend_factory = backend_factory
        self._list_monitors = monitor_lister
        self._capture_monitor = monitor_capturer

    def list_windows(self) -> ListWindowsResult:
        """Open user windows with title, app, bounds and display."""
        self.logger.debug("list_windows: fetching window list")
        try:
            records: list[RawWindow] = self._backend_factory().window_records()
            self.logger.debug("list_windows: found %d windows", len(records))
            windows: list[WindowInfo] = filter_windows(records)
        except Exception as e:
            self.logger.error("list_windows failed: %s", error_message(e))
            raise normalize_error(e, "Failed to list windows") from e

        self.logger.debug("list_windows: filtered to %d user windows", len(windows))
        return {"windows": windows}

    def capture_window(
        self,
        window_id: str,
        mode: CaptureMode = "full",
        output_path: str | None = None,
    ) -> CaptureWindowResult:
        """Capture one window to a PNG file.

        Both modes capture the full window including decorations.
        """
        self.logger.debug("capture_window: %s (mode: %s)", window_id, mode)
        try:
            out_file: str = resolve_output_file(
                output_path, screenshot_filename(window_id), self.settings.output_dir
            )
            backend: WindowBackend = self._backend_factory()
            target: NativeWindow | None = find_by_id(
                backend.native_windows(), window_id
            )
            if target is None:
                raise WindowNotFoundError(window_id)

            file_path: str = write_png(backend.capture(target), out_file)
            self.logger.info("capture_window: saved %s to %s", window_id, file_path)

            # The capture list carries no title/app, so ask for metadata separately
            records: list[RawWindow] = backend.window_records()
        except Exception as e:
            self.logger.error(
                "capture_window failed for %s: %s", window_id, error_message(e)
            )
            raise normalize_error(e, "Failed to capture window") from e

        return {
            "success": True,
            "file_path": file_path,
            "window": window_metadata(records, window_id),
        }

    def capture_windows(
        self,
        window_ids: list[str],
        mode: CaptureMode = "full",
        output_dir: str | None = None,
    ) -> CaptureWindowsResult:
        """Capture several windows, recording per-window failures in the result."""
        self.logger.debug(
            "capture_windows: %d windows (mode: %s)", len(window_ids or []), mode
        )
        try:
            if not window_ids:
                raise invalid_request("At least one window_id is required")
            directory: str = resolve_output_dir(output_dir, self.settings.output_dir)

            # One snapshot of each list for the whole batch
            backend: WindowBackend = self._backend_factory()
            natives: list[NativeWindow] = backend.native_windows()
            records: list[RawWindow] = backend.window_records()

            captures: list[WindowCaptureItem] = [
                self._capture_one(backend, natives, records, window_id, directory)
                for window_id in window_ids
            ]
        except Exception as e:
            self.logger.error("capture_windows failed: %s", error_message(e))
            raise normalize_error(e, "Failed to capture windows") from e

        return {
            "success": any(c["success"] for c in captures),
            "captures": captures,
        }

    def _capture_one(
        self,
        backend: WindowBackend,
        natives: list[NativeWindow],
        records: list[RawWindow],
        window_id: str,
        directory: str,
    ) -> WindowCaptureItem:
        target: NativeWindow | None = find_by_id(natives, window_id)
        if target is None:
            self.logger.warning("capture_windows: window %s not found", window_id)
            return {
                "window_id": window_id,
                "success": False,
                "error": str(WindowNotFoundError(window_id)),
            }

        try:
            file_path: str = write_png(
                backend.capture(target),
                os.path.join(directory, screenshot_filename(window_id)),
            )
        except Exception as e:
            self.logger.error(
                "capture_windows: failed to capture %s: %s", window_id, error_message(e)
            )
            return {"window_id": window_id, "success": False, "error": error_message(e)}

        self.logger.info("capture_windows: saved %s to %s", window_id, file_path)
        return {
            "window_id": window_id,
            "success": True,
            "file_path": file_path,
            "window": window_metadata(records, window_id),
        }

    def capture_display(self, display_id: int | None = None) -> CaptureDisplayResult:
        """Capture one display, or every display when display_id is None."""
        self.logger.debug(
            "capture_display: %s", "all" if display_id is None else display_id
        )
        try:
            monitors: list[MonitorInfo] = self._list_monitors()
            if not monitors:
                raise internal_error("No displays found")
            self.logger.debug("capture_display: found %d displays", len(monitors))

            if display_id is not None:
                if display_id < 0 or display_id >= len(monitors):
                    raise invalid_request(
                        f"Invalid display ID {display_id}. "
                        f"Available displays: 0-{len(monitors) - 1}"
                    )
                file_path: str = self._save_display(monitors[display_id], display_id)
                return {"success": True, "file_path": file_path, "display": display_id}

            captures: list[DisplayCapture] = [
                {"display": i, "file_path": self._save_display(monitor, i)}
                for i, monitor in enumerate(monitors)
            ]
        except Exception as e:
            self.logger.error("capture_display failed: %s", error_message(e))
            raise normalize_error(e, "Failed to capture display") from e

        return {"success": True, "captures": captures}

    def _save_display(self, monitor: MonitorInfo, display: int) -> str:
        out_file: str = resolve_output_file(
            None, display_filename(display), self.settings.output_dir
        )
        file_path: str = write_png(self._capture_monitor(monitor), out_file)
        self.logger.info("capture_display: saved display %d to %s", display, file_path)
        return file_path
