"""macOS window enumeration and capture using Quartz (PyObjC)."""

from __future__ import annotations

from typing import Any

import Quartz
from PIL import Image as PILImage

from .types import Bounds, NativeWindow, RawWindow

# Regular application windows live on layer 0
NORMAL_WINDOW_LAYER: int = 0


def _window_list() -> list[dict[str, Any]]:
    """Snapshot of on-screen windows from the window server."""
    options: int = (
        Quartz.kCGWindowListOptionOnScreenOnly
        | Quartz.kCGWindowListExcludeDesktopElements
    )
    info: Any = Quartz.CGWindowListCopyWindowInfo(options, Quartz.kCGNullWindowID)
    if info is None:
        raise RuntimeError("Window server returned no window list")
    return list(info)


def _bounds(window: dict[str, Any]) -> Bounds:
    raw: dict[str, float] = window.get("kCGWindowBounds") or {}
    return {
        "x": int(raw.get("X", 0)),
        "y": int(raw.get("Y", 0)),
        "width": int(raw.get("Width", 0)),
        "height": int(raw.get("Height", 0)),
    }


def cgimage_to_pil(cg_image: Any) -> PILImage.Image:
    """Convert a 32-bit BGRA CGImage to an RGB Pillow image."""
    width: int = Quartz.CGImageGetWidth(cg_image)
    height: int = Quartz.CGImageGetHeight(cg_image)
    if width <= 0 or height <= 0:
        raise ValueError(f"Window has invalid dimensions: {width}x{height}")
    bytes_per_row: int = Quartz.CGImageGetBytesPerRow(cg_image)
    data: bytes = bytes(
        Quartz.CGDataProviderCopyData(Quartz.CGImageGetDataProvider(cg_image))
    )
    pil_img: PILImage.Image = PILImage.frombuffer(
        "RGBA", (width, height), data, "raw", "BGRA", bytes_per_row, 1
    )
    return pil_img.convert("RGB")


class QuartzBackend:
    """Window backend for macOS."""

    def native_windows(self) -> list[NativeWindow]:
        return [
            {"id": str(w["kCGWindowNumber"]), "handle": int(w["kCGWindowNumber"])}
            for w in _window_list()
            if "kCGWindowNumber" in w
        ]

    def window_records(self) -> list[RawWindow]:
        records: list[RawWindow] = []
        for w in _window_list():
            if w.get("kCGWindowLayer", NORMAL_WINDOW_LAYER) != NORMAL_WINDOW_LAYER:
                continue
            if "kCGWindowNumber" not in w:
                continue
            records.append(
                {
                    "id": str(w["kCGWindowNumber"]),
                    "title": w.get("kCGWindowName") or None,
                    "app": w.get("kCGWindowOwnerName") or None,
                    "bounds": _bounds(w),
                }
            )
        return records

    def capture(self, window: NativeWindow) -> PILImage.Image:
        # Framing (the drop shadow) is left out; title bar and borders are kept
        cg_image: Any = Quartz.CGWindowListCreateImage(
            Quartz.CGRectNull,
            Quartz.kCGWindowListOptionIncludingWindow,
            window["handle"],
            Quartz.kCGWindowImageBoundsIgnoreFraming,
        )
        if cg_image is None:
            raise RuntimeError(f"Failed to capture window {window['id']}")
        return cgimage_to_pil(cg_image)
