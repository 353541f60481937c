"""Small helpers that turn raw file metadata into readable text."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

MODIFIED_FORMAT = "%Y-%m-%d %H:%M:%S"
MODIFIED_PLACEHOLDER = "---------- --:--:--"


def format_size(size: int) -> str:
    """Convert a byte count into a friendly string such as ``12.4K``."""
    value = float(size)
    for unit in ("B", "K", "M", "G", "T", "P"):
        if value < 1024 or unit == "P":
            break
        value /= 1024
    if unit == "B":
        return f"{int(value)}B"
    formatted = f"{value:.1f}".rstrip("0").rstrip(".")
    return f"{formatted}{unit}"


def format_modified(timestamp: Optional[datetime]) -> str:
    """Render a modification time, or a same-width placeholder when unknown."""
    if timestamp is None:
        return MODIFIED_PLACEHOLDER
    return timestamp.strftime(MODIFIED_FORMAT)


__all__ = ["format_size", "format_modified", "MODIFIED_PLACEHOLDER"]
