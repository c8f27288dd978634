"""Output path resolution and PNG file writing."""

from __future__ import annotations

import os

from PIL import Image as PILImage

from .errors import invalid_request
from .screenshot import encode_png

PNG_EXTENSION: str = ".png"


def _ensure_directory(directory: str) -> None:
    """Create directory (and parents) if missing, as an INVALID_REQUEST on failure."""
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        raise invalid_request(f"Cannot create directory: {directory}") from e


def resolve_output_file(
    output_path: str | None, default_name: str, default_dir: str
) -> str:
    """Return the absolute file path a capture should be written to.

    A caller-supplied path must end in ``.png``; its directory is created if
    needed. Otherwise ``default_name`` inside ``default_dir`` is used.
    """
    if not output_path:
        directory: str = os.path.abspath(default_dir)
        os.makedirs(directory, exist_ok=True)
        return os.path.join(directory, default_name)

    resolved: str = os.path.abspath(os.path.expanduser(output_path))
    if not resolved.endswith(PNG_EXTENSION):
        raise invalid_request(
            f"Invalid output_path '{output_path}': must end with '{PNG_EXTENSION}'"
        )
    _ensure_directory(os.path.dirname(resolved))
    return resolved


def resolve_output_dir(output_dir: str | None, default_dir: str) -> str:
    """Return the absolute directory batch captures should be written to."""
    if not output_dir:
        directory: str = os.path.abspath(default_dir)
        os.makedirs(directory, exist_ok=True)
        return directory

    resolved: str = os.path.abspath(os.path.expanduser(output_dir))
    _ensure_directory(resolved)
    return resolved


def write_png(image: PILImage.Image, path: str) -> str:
    """Encode image as PNG, write it to path and return the absolute path.

    Raises OSError if the file is not on disk after the write.
    """
    data: bytes = encode_png(image)
    with open(path, "wb") as f:
        f.write(data)
    if not os.path.isfile(path):
        raise OSError(f"Screenshot was not written to {path}")
    return os.path.abspath(path)
