"""Byte-size ceiling check applied before an input file is read."""

from __future__ import annotations

from pathlib import Path

from city_coords.common.constants import MAX_FILE_SIZE
from city_coords.common.errors import FileTooLarge, IoFailure


def validate_file_size(path: Path, max_size: int = MAX_FILE_SIZE) -> int:
    """Return the size of ``path`` in bytes, failing if it exceeds ``max_size``.

    Only metadata is inspected. A file exactly ``max_size`` bytes long passes.
    """
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise IoFailure(path, "stat", exc) from exc
    if size > max_size:
        raise FileTooLarge(path, size=size, max_size=max_size)
    return size
