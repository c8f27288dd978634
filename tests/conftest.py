"""Shared fixtures and platform stubs for cross-platform testing."""

from __future__ import annotations

import ctypes
import logging
import sys
from unittest.mock import MagicMock

from PIL import Image as PILImage

_mock_win32con = MagicMock()
_mock_win32con.PROCESS_QUERY_INFORMATION = 0x0400
_mock_win32con.PROCESS_VM_READ = 0x0010

_mock_pywintypes = MagicMock()
_mock_pywintypes.error = OSError

sys.modules.setdefault("win32gui", MagicMock())
sys.modules.setdefault("win32ui", MagicMock())
sys.modules.setdefault("win32api", MagicMock())
sys.modules.setdefault("win32process", MagicMock())
sys.modules.setdefault("win32con", _mock_win32con)
sys.modules.setdefault("pywintypes", _mock_pywintypes)
sys.modules.setdefault("Quartz", MagicMock())

if not hasattr(ctypes, "windll"):
    ctypes.windll = MagicMock()

# ---------------------------------------------------------------------------

from mcp.server.fastmcp.server import FastMCP
import pytest

from vision_mcp import server as server_module
from vision_mcp.config import Settings
from vision_mcp.tools import ToolHandlers
from vision_mcp.types import MonitorInfo, NativeWindow, RawWindow

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def raw_window(
    window_id: str,
    title: str | None = "Test Window",
    app: str | None = "TestApp",
    x: int = 100,
    y: int = 200,
    width: int = 800,
    height: int = 600,
) -> RawWindow:
    """Build a RawWindow record."""
    return {
        "id": window_id,
        "title": title,
        "app": app,
        "bounds": {"x": x, "y": y, "width": width, "height": height},
    }


class FakeBackend:
    """In-memory window backend that renders solid-color images."""

    def __init__(
        self,
        records: list[RawWindow],
        failing: dict[str, Exception] | None = None,
        extra_native: list[str] | None = None,
    ) -> None:
        self.records = records
        self.failing = failing or {}
        self.extra_native = extra_native or []
        self.native_calls = 0
        self.record_calls = 0
        self.captured: list[str] = []

    def native_windows(self) -> list[NativeWindow]:
        self.native_calls += 1
        ids: list[str] = [r["id"] for r in self.records] + self.extra_native
        return [{"id": i, "handle": i} for i in ids]

    def window_records(self) -> list[RawWindow]:
        self.record_calls += 1
        return list(self.records)

    def capture(self, window: NativeWindow) -> PILImage.Image:
        self.captured.append(window["id"])
        if window["id"] in self.failing:
            raise self.failing[window["id"]]
        return PILImage.new("RGB", (40, 30), (255, 0, 0))


DUAL_MONITORS: list[MonitorInfo] = [
    {"index": 1, "width": 1920, "height": 1080, "x": 0, "y": 0, "is_primary": True},
    {
        "index": 2,
        "width": 1920,
        "height": 1080,
        "x": 1920,
        "y": 0,
        "is_primary": False,
    },
]


def fake_monitor_capture(monitor: MonitorInfo) -> PILImage.Image:
    """Render a small image standing in for a monitor grab."""
    return PILImage.new("RGB", (16, 9), (0, 0, monitor["index"]))


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings writing default captures into a per-test directory."""
    return Settings(output_dir=str(tmp_path / "captures"))


@pytest.fixture
def test_logger() -> logging.Logger:
    """Logger injected into handlers under test."""
    return logging.getLogger("vision_mcp.tests")


@pytest.fixture
def backend() -> FakeBackend:
    """Backend with two capturable user windows and a few system windows."""
    return FakeBackend(
        [
            raw_window("101", "Inbox", "Mail"),
            raw_window("102", None, None, x=-1600, y=0),
            raw_window("200", "Menubar", "WindowManager"),
            raw_window("201", "Gesture Blocking Overlay", "Dock"),
            raw_window("202", "Status item", "Clock", width=30, height=22),
        ]
    )


@pytest.fixture
def handlers(
    settings: Settings, test_logger: logging.Logger, backend: FakeBackend
) -> ToolHandlers:
    """Handlers wired to the fake backend and a fake dual-monitor setup."""
    return ToolHandlers(
        settings,
        test_logger,
        backend_factory=lambda: backend,
        monitor_lister=lambda: list(DUAL_MONITORS),
        monitor_capturer=fake_monitor_capture,
    )


@pytest.fixture
def mcp_server(handlers: ToolHandlers, monkeypatch: pytest.MonkeyPatch) -> FastMCP:
    """Return the FastMCP server instance routed to the fake handlers."""
    monkeypatch.setattr(server_module, "handlers", handlers)
    return server_module.mcp
