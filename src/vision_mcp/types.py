"""Shared type definitions for Vision MCP."""

from __future__ import annotations

from typing import Any, Literal

from typing_extensions import TypedDict

CaptureMode = Literal["full", "content"]


class Bounds(TypedDict):
    """Window position and size in screen coordinates."""

    x: int
    y: int
    width: int
    height: int


class NativeWindow(TypedDict):
    """Capturable window as reported by the platform backend."""

    id: str
    handle: Any


class RawWindow(TypedDict):
    """Unfiltered window metadata as reported by the platform backend."""

    id: str
    title: str | None
    app: str | None
    bounds: Bounds


class WindowInfo(TypedDict):
    """Window entry returned by list_windows."""

    id: str
    title: str
    app: str
    bounds: Bounds
    display: int


class ListWindowsResult(TypedDict):
    """Response for list_windows."""

    windows: list[WindowInfo]


class WindowMetadata(TypedDict):
    """Window identity echoed back in capture responses."""

    id: str
    title: str
    app: str


class CaptureWindowResult(TypedDict):
    """Response for capture_window."""

    success: bool
    file_path: str
    window: WindowMetadata


class WindowCaptureItem(TypedDict, total=False):
    """Per-window outcome inside a capture_windows response."""

    window_id: str
    success: bool
    file_path: str
    error: str
    window: WindowMetadata


class CaptureWindowsResult(TypedDict):
    """Response for capture_windows."""

    success: bool
    captures: list[WindowCaptureItem]


class DisplayCapture(TypedDict):
    """One captured display inside a multi-display response."""

    display: int
    file_path: str


class CaptureDisplayResult(TypedDict, total=False):
    """Response for capture_display.

    A single display fills ``file_path`` and ``display``; capturing every
    display fills ``captures`` instead.
    """

    success: bool
    file_path: str
    display: int
    captures: list[DisplayCapture]


class MonitorInfo(TypedDict):
    """Monitor information returned by list_monitors."""

    index: int
    width: int
    height: int
    x: int
    y: int
    is_primary: bool


class BitmapInfo(TypedDict):
    """Return type of PyCBitmap.GetInfo() (BITMAP struct)."""

    bmType: int
    bmWidth: int
    bmHeight: int
    bmWidthBytes: int
    bmPlanes: int
    bmBitsPixel: int
