"""Display capture with mss and PNG encoding with Pillow."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import mss
from PIL import Image as PILImage

from .types import MonitorInfo

if TYPE_CHECKING:
    from mss.screenshot import ScreenShot


def list_monitors() -> list[MonitorInfo]:
    """List physical monitors in platform order.

    ``mss`` reports the combined virtual screen at index 0; it is skipped, so
    entry ``N`` of the result is display ``N`` with ``index`` ``N + 1``.
    """
    with mss.mss() as sct:
        monitors: list[dict[str, int]] = sct.monitors
    return [
        {
            "index": i,
            "width": m["width"],
            "height": m["height"],
            "x": m["left"],
            "y": m["top"],
            "is_primary": m["left"] == 0 and m["top"] == 0,
        }
        for i, m in enumerate(monitors)
        if i > 0
    ]


def capture_monitor(monitor: MonitorInfo) -> PILImage.Image:
    """Grab one monitor as an RGB image."""
    with mss.mss() as sct:
        monitors: list[dict[str, int]] = sct.monitors
        index: int = monitor["index"]
        if index <= 0 or index >= len(monitors):
            raise ValueError(
                f"Monitor {index} not found. Available: 1-{len(monitors) - 1}"
            )
        screenshot: ScreenShot = sct.grab(monitors[index])

    return PILImage.frombytes("RGB", screenshot.size, screenshot.bgra, "raw", "BGRX")


def encode_png(image: PILImage.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buffer: io.BytesIO = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
