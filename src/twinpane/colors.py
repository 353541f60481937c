"""Color management for the dual pane browser."""

from __future__ import annotations

import curses
from enum import IntEnum
from typing import TYPE_CHECKING

from twinpane.jobs import ERROR_PREFIX

if TYPE_CHECKING:
    from twinpane.state import PaneEntry


class ColorPair(IntEnum):
    """Color pair constants for curses."""
    DEFAULT = 0
    DIRECTORY = 1
    SYMLINK = 2
    HIDDEN = 3
    MARKED = 4
    ERROR = 5
    DIALOG = 6


def init_colors() -> None:
    """Initialize curses color pairs.

    Call this after curses initialization and before rendering.
    """
    if not curses.has_colors():
        return

    curses.start_color()
    curses.use_default_colors()

    curses.init_pair(ColorPair.DIRECTORY, curses.COLOR_BLUE, -1)
    curses.init_pair(ColorPair.SYMLINK, curses.COLOR_CYAN, -1)
    curses.init_pair(ColorPair.HIDDEN, 8 if curses.COLORS > 8 else curses.COLOR_WHITE, -1)
    curses.init_pair(ColorPair.MARKED, curses.COLOR_YELLOW, -1)
    curses.init_pair(ColorPair.ERROR, curses.COLOR_RED, -1)
    curses.init_pair(ColorPair.DIALOG, curses.COLOR_BLACK, curses.COLOR_CYAN)


def get_entry_color(entry: "PaneEntry") -> int:
    """Get the attributes used to draw an entry's name.

    Marked entries always stand out, whatever their type.
    """
    if entry.marked:
        if not curses.has_colors():
            return curses.A_BOLD
        return curses.color_pair(ColorPair.MARKED) | curses.A_BOLD

    if not curses.has_colors():
        return curses.A_NORMAL

    if entry.is_dir:
        return curses.color_pair(ColorPair.DIRECTORY) | curses.A_BOLD

    if entry.is_symlink:
        return curses.color_pair(ColorPair.SYMLINK)

    # Hidden files (dotfiles)
    if entry.name.startswith("."):
        return curses.color_pair(ColorPair.HIDDEN)

    return curses.A_NORMAL


def get_status_color(message: str) -> int:
    """Errors on the status row are drawn in red."""
    if not message.startswith(ERROR_PREFIX):
        return curses.A_NORMAL
    if not curses.has_colors():
        return curses.A_BOLD
    return curses.color_pair(ColorPair.ERROR) | curses.A_BOLD


__all__ = ["ColorPair", "init_colors", "get_entry_color", "get_status_color"]
