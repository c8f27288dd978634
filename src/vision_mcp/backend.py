"""Platform window backend interface and selection."""

from __future__ import annotations

import sys
from typing import Protocol

from PIL import Image as PILImage

from .types import NativeWindow, RawWindow


class WindowBackend(Protocol):
    """Native window enumeration and capture for one platform."""

    def native_windows(self) -> list[NativeWindow]:
        """Windows that can be captured, with their native handles."""
        ...

    def window_records(self) -> list[RawWindow]:
        """Title, owning app and bounds for every open window."""
        ...

    def capture(self, window: NativeWindow) -> PILImage.Image:
        """Capture one window, decorations included."""
        ...


def get_backend(platform: str | None = None) -> WindowBackend:
    """Return the backend for the running (or given) platform."""
    platform = platform or sys.platform
    if platform == "darwin":
        from .backend_quartz import QuartzBackend

        return QuartzBackend()
    if platform == "win32":
        from .backend_win32 import Win32Backend

        return Win32Backend()
    raise RuntimeError(f"Window capture is not supported on platform '{platform}'")
