"""Error taxonomy and normalization for tool handlers.

Every tool reports failures with one of two JSON-RPC codes:

- ``INVALID_REQUEST``: caller input is malformed or out of range.
- ``INTERNAL_ERROR``: everything else (native library, filesystem, a window
  or display that vanished between listing and capture).
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_REQUEST, ErrorData

UNKNOWN_ERROR: str = "Unknown error"


class ErrorKind(Enum):
    """Structured error category exposed at the tool boundary."""

    INVALID_REQUEST = INVALID_REQUEST
    INTERNAL = INTERNAL_ERROR


class NormalizedError(NamedTuple):
    """Tagged failure produced by classify()."""

    kind: ErrorKind
    message: str


class WindowNotFoundError(LookupError):
    """The requested window is not in the current native window list."""

    def __init__(self, window_id: str) -> None:
        self.window_id = window_id
        super().__init__(f"Window {window_id} not found. It may have been closed.")


class PermissionDeniedError(RuntimeError):
    """Screen recording permission has not been granted to this process."""


def invalid_request(message: str) -> McpError:
    """Build an INVALID_REQUEST protocol error."""
    return McpError(ErrorData(code=INVALID_REQUEST, message=message))


def internal_error(message: str) -> McpError:
    """Build an INTERNAL_ERROR protocol error."""
    return McpError(ErrorData(code=INTERNAL_ERROR, message=message))


def error_message(exc: BaseException) -> str:
    """Best-available message for an exception, never empty."""
    return str(exc) or UNKNOWN_ERROR


def is_structured(exc: BaseException) -> bool:
    """True if exc already carries one of the two boundary error codes."""
    return isinstance(exc, McpError) and exc.error.code in (
        INVALID_REQUEST,
        INTERNAL_ERROR,
    )


def classify(exc: BaseException, context: str | None = None) -> NormalizedError:
    """Map any failure onto an error kind and a caller-facing message.

    Structured errors keep their own kind and message; anything else is
    INTERNAL, prefixed with ``context`` when given.
    """
    if isinstance(exc, McpError) and is_structured(exc):
        return NormalizedError(ErrorKind(exc.error.code), exc.error.message)
    message: str = error_message(exc)
    if context:
        message = f"{context}: {message}"
    return NormalizedError(ErrorKind.INTERNAL, message)


def normalize_error(exc: BaseException, context: str | None = None) -> McpError:
    """Return the protocol error to raise for exc.

    Structured errors are returned as-is so they are never double-wrapped.
    """
    if isinstance(exc, McpError) and is_structured(exc):
        return exc
    normalized: NormalizedError = classify(exc, context)
    return McpError(ErrorData(code=normalized.kind.value, message=normalized.message))
