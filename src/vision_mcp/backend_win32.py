"""Windows window enumeration and capture using win32gui and PrintWindow."""

from __future__ import annotations

import ctypes
import ntpath
from typing import TYPE_CHECKING, cast

import pywintypes
import win32api
import win32con
import win32gui
import win32process
import win32ui
from PIL import Image as PILImage

from .types import BitmapInfo, NativeWindow, RawWindow

if TYPE_CHECKING:
    from _win32typing import PyCBitmap, PyCDC

# PrintWindow flag: capture full DWM-rendered content (Windows 8.1+)
PW_RENDERFULLCONTENT: int = 2


def _visible_hwnds() -> list[int]:
    """Top-level visible window handles in z-order."""
    hwnds: list[int] = []

    def enum_callback(hwnd: int, ctx: list[int]) -> bool:
        """Collect every visible hwnd into ctx."""
        if win32gui.IsWindowVisible(hwnd):
            ctx.append(hwnd)
        return True

    win32gui.EnumWindows(enum_callback, hwnds)
    return hwnds


def process_name(hwnd: int) -> str | None:
    """Executable name (without extension) of the process owning hwnd."""
    try:
        _, pid = win32process.GetWindowThreadProcessId(hwnd)
        handle = win32api.OpenProcess(
            win32con.PROCESS_QUERY_INFORMATION | win32con.PROCESS_VM_READ, False, pid
        )
        try:
            exe_path: str = win32process.GetModuleFileNameEx(handle, 0)
        finally:
            win32api.CloseHandle(handle)
    except pywintypes.error:
        # Elevated and protected processes refuse the query
        return None
    return ntpath.splitext(ntpath.basename(exe_path))[0] or None


def capture_window_hwnd(hwnd: int) -> PILImage.Image:
    """Capture a window's content using Win32 PrintWindow API.

    This captures the actual window content even if it's behind other windows.
    """
    left, top, right, bottom = win32gui.GetWindowRect(hwnd)
    width: int = right - left
    height: int = bottom - top

    if width <= 0 or height <= 0:
        raise ValueError(f"Window has invalid dimensions: {width}x{height}")

    hwnd_dc: int = win32gui.GetWindowDC(hwnd)
    mfc_dc: PyCDC = win32ui.CreateDCFromHandle(hwnd_dc)
    save_dc: PyCDC = mfc_dc.CreateCompatibleDC()
    bitmap: PyCBitmap = win32ui.CreateBitmap()
    try:
        bitmap.CreateCompatibleBitmap(mfc_dc, width, height)
        save_dc.SelectObject(bitmap)

        ctypes.windll.user32.PrintWindow(
            hwnd, save_dc.GetSafeHdc(), PW_RENDERFULLCONTENT
        )

        bmp_info: BitmapInfo = cast(BitmapInfo, bitmap.GetInfo())  # pyright: ignore[reportUnknownMemberType]
        bmp_bits: bytes = bitmap.GetBitmapBits(True)
        return PILImage.frombuffer(
            "RGB",
            (bmp_info["bmWidth"], bmp_info["bmHeight"]),
            bmp_bits,
            "raw",
            "BGRX",
            0,
            1,
        )
    finally:
        win32gui.DeleteObject(bitmap.GetHandle())
        save_dc.DeleteDC()
        mfc_dc.DeleteDC()
        win32gui.ReleaseDC(hwnd, hwnd_dc)


class Win32Backend:
    """Window backend for Windows."""

    def native_windows(self) -> list[NativeWindow]:
        return [{"id": str(hwnd), "handle": hwnd} for hwnd in _visible_hwnds()]

    def window_records(self) -> list[RawWindow]:
        records: list[RawWindow] = []
        for hwnd in _visible_hwnds():
            try:
                left, top, right, bottom = win32gui.GetWindowRect(hwnd)
            except pywintypes.error:
                # Closed after enumeration
                continue
            records.append(
                {
                    "id": str(hwnd),
                    "title": win32gui.GetWindowText(hwnd) or None,
                    "app": process_name(hwnd),
                    "bounds": {
                        "x": left,
                        "y": top,
                        "width": right - left,
                        "height": bottom - top,
                    },
                }
            )
        return records

    def capture(self, window: NativeWindow) -> PILImage.Image:
        return capture_window_hwnd(window["handle"])
