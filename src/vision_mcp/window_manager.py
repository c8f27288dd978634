"""Window filtering, mapping and lookup over backend snapshots."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TypeVar

from .types import Bounds, NativeWindow, RawWindow, WindowInfo, WindowMetadata

# Owner name of the macOS window server's own windows
WINDOW_MANAGER_OWNER: str = "WindowManager"
# System overlay that covers the screen during trackpad gestures
OVERLAY_TITLE: str = "Gesture Blocking Overlay"
# Anything smaller is a menu bar item or utility artifact, not user content
MIN_WINDOW_SIZE: int = 50

UNTITLED: str = "(Untitled)"
UNKNOWN_APP: str = "Unknown"
UNKNOWN_METADATA: str = "(Unknown)"


_W = TypeVar("_W", NativeWindow, RawWindow)


def find_by_id(windows: Iterable[_W], window_id: str) -> _W | None:
    """Return the first window whose stringified id equals window_id exactly."""
    for w in windows:
        if str(w["id"]) == window_id:
            return w
    return None


def is_user_window(window: RawWindow) -> bool:
    """Return False for window-server, overlay and tiny utility windows."""
    if window["app"] == WINDOW_MANAGER_OWNER:
        return False
    if window["title"] and OVERLAY_TITLE in window["title"]:
        return False
    bounds: Bounds = window["bounds"]
    return bounds["width"] >= MIN_WINDOW_SIZE and bounds["height"] >= MIN_WINDOW_SIZE


def infer_display(bounds: Bounds) -> int:
    """Guess the display a window sits on from its x coordinate.

    Only right for one or two monitors laid out left-to-right from the origin.
    """
    return 0 if bounds["x"] >= 0 else 1


def to_window_info(window: RawWindow) -> WindowInfo:
    """Map a raw backend window to the list_windows entry shape."""
    bounds: Bounds = window["bounds"]
    return {
        "id": str(window["id"]),
        "title": window["title"] or UNTITLED,
        "app": window["app"] or UNKNOWN_APP,
        "bounds": {
            "x": int(bounds["x"]),
            "y": int(bounds["y"]),
            "width": int(bounds["width"]),
            "height": int(bounds["height"]),
        },
        "display": infer_display(bounds),
    }


def filter_windows(windows: Iterable[RawWindow]) -> list[WindowInfo]:
    """Drop system windows and map the rest, preserving platform order."""
    return [to_window_info(w) for w in windows if is_user_window(w)]


def window_metadata(records: Sequence[RawWindow], window_id: str) -> WindowMetadata:
    """Title and app for window_id, with placeholders if it is not in records."""
    record: RawWindow | None = find_by_id(records, window_id)
    return {
        "id": window_id,
        "title": (record["title"] if record else None) or UNKNOWN_METADATA,
        "app": (record["app"] if record else None) or UNKNOWN_METADATA,
    }
