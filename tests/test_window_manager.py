"""Tests for vision_mcp.window_manager."""

from __future__ import annotations

import pytest

from conftest import raw_window
from vision_mcp.types import NativeWindow, RawWindow, WindowInfo
from vision_mcp.window_manager import (
    filter_windows,
    find_by_id,
    infer_display,
    is_user_window,
    to_window_info,
    window_metadata,
)

# ---------------------------------------------------------------------------
# find_by_id
# ---------------------------------------------------------------------------


def test_find_by_id_exact_match() -> None:
    """Returns the window whose id equals the requested id."""
    windows: list[NativeWindow] = [
        {"id": "1", "handle": 1},
        {"id": "12", "handle": 12},
    ]
    assert find_by_id(windows, "12") == {"id": "12", "handle": 12}


def test_find_by_id_no_prefix_match() -> None:
    """Matching is string equality, not substring or prefix."""
    windows: list[NativeWindow] = [{"id": "123", "handle": 123}]
    assert find_by_id(windows, "12") is None
    assert find_by_id(windows, "1234") is None


def test_find_by_id_first_wins() -> None:
    """With duplicate ids the first entry is returned."""
    windows: list[NativeWindow] = [
        {"id": "5", "handle": "first"},
        {"id": "5", "handle": "second"},
    ]
    found: NativeWindow | None = find_by_id(windows, "5")
    assert found is not None
    assert found["handle"] == "first"


def test_find_by_id_empty() -> None:
    """An empty snapshot finds nothing."""
    assert find_by_id([], "1") is None


# ---------------------------------------------------------------------------
# is_user_window / filter_windows
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "window",
    [
        raw_window("1", "Menubar", "WindowManager"),
        raw_window("2", "Gesture Blocking Overlay", "Dock"),
        raw_window("3", "xx Gesture Blocking Overlay xx", "Dock"),
        raw_window("4", "Tiny", "App", width=49, height=400),
        raw_window("5", "Short", "App", width=400, height=49),
    ],
    ids=["window_manager", "overlay", "overlay_substring", "narrow", "short"],
)
def test_is_user_window_excluded(window: RawWindow) -> None:
    """System, overlay and tiny windows are excluded."""
    assert is_user_window(window) is False


def test_is_user_window_minimum_size_kept() -> None:
    """Exactly 50x50 is kept."""
    assert is_user_window(raw_window("1", width=50, height=50)) is True


def test_is_user_window_owner_match_is_exact() -> None:
    """Only the exact WindowManager owner is excluded."""
    assert is_user_window(raw_window("1", "x", "WindowManagerHelper")) is True


def test_is_user_window_missing_title() -> None:
    """A window without a title is still a user window."""
    assert is_user_window(raw_window("1", None, "App")) is True


def test_filter_windows_order_and_mapping() -> None:
    """Survivors keep platform order and are mapped to WindowInfo."""
    result: list[WindowInfo] = filter_windows(
        [
            raw_window("3", "B", "AppB"),
            raw_window("9", "Menubar", "WindowManager"),
            raw_window("1", "A", "AppA"),
        ]
    )
    assert [w["id"] for w in result] == ["3", "1"]
    assert result[0]["title"] == "B"


# ---------------------------------------------------------------------------
# to_window_info / infer_display
# ---------------------------------------------------------------------------


def test_to_window_info_placeholders() -> None:
    """Missing title and app get placeholder strings."""
    info: WindowInfo = to_window_info(raw_window("7", None, None))
    assert info["title"] == "(Untitled)"
    assert info["app"] == "Unknown"


def test_to_window_info_shape() -> None:
    """Bounds are copied and the display is inferred."""
    info: WindowInfo = to_window_info(raw_window("7", "T", "A", x=10, y=20))
    assert info == {
        "id": "7",
        "title": "T",
        "app": "A",
        "bounds": {"x": 10, "y": 20, "width": 800, "height": 600},
        "display": 0,
    }


@pytest.mark.parametrize(
    ("x", "expected"),
    [(0, 0), (2500, 0), (-1, 1), (-1920, 1)],
)
def test_infer_display(x: int, expected: int) -> None:
    """Display 0 for x >= 0, otherwise display 1."""
    assert infer_display({"x": x, "y": 0, "width": 100, "height": 100}) == expected


# ---------------------------------------------------------------------------
# window_metadata
# ---------------------------------------------------------------------------


def test_window_metadata_found() -> None:
    """Title and app come from the matching record."""
    records: list[RawWindow] = [raw_window("1", "Doc", "Editor")]
    assert window_metadata(records, "1") == {"id": "1", "title": "Doc", "app": "Editor"}


def test_window_metadata_missing_record() -> None:
    """A window absent from the metadata list gets placeholders."""
    assert window_metadata([], "1") == {
        "id": "1",
        "title": "(Unknown)",
        "app": "(Unknown)",
    }


def test_window_metadata_empty_fields() -> None:
    """Empty title/app on a found record also get placeholders."""
    records: list[RawWindow] = [raw_window("1", "", None)]
    meta = window_metadata(records, "1")
    assert meta["title"] == "(Unknown)"
    assert meta["app"] == "(Unknown)"
