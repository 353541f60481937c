"""Utility functions for rendering."""

from __future__ import annotations

import curses
from typing import Tuple

# Box drawing characters
BOX_TOP_LEFT = "┌"
BOX_TOP_RIGHT = "┐"
BOX_BOTTOM_LEFT = "└"
BOX_BOTTOM_RIGHT = "┘"
BOX_HORIZONTAL = "─"
BOX_VERTICAL = "│"

MIN_NAME_WIDTH = 4
SIZE_COLUMN_WIDTH = 7


def determine_column_widths(interior_width: int, modified_width: int) -> Tuple[int, int, int]:
    """Split a pane row into name, size and modified columns.

    The date column goes first when space runs out, then the size column;
    the name column never shrinks below ``MIN_NAME_WIDTH``.
    """
    size_width = SIZE_COLUMN_WIDTH
    if interior_width - (size_width + modified_width + 2) < MIN_NAME_WIDTH:
        modified_width = 0
    if interior_width - (size_width + modified_width + 2) < MIN_NAME_WIDTH:
        size_width = 0
    gaps = (1 if size_width else 0) + (1 if modified_width else 0)
    name_width = max(interior_width - size_width - modified_width - gaps, 0)
    return name_width, size_width, modified_width


def draw_frame(
    stdscr: "curses._CursesWindow",  # type: ignore[name-defined]
    origin_y: int,
    origin_x: int,
    height: int,
    width: int,
    attr: int = curses.A_NORMAL,
) -> None:
    """Draw a rectangular box frame."""
    if height < 2 or width < 2:
        return

    top = origin_y
    bottom = origin_y + height - 1
    left = origin_x
    right = origin_x + width - 1

    try:
        stdscr.addstr(top, left, BOX_TOP_LEFT + BOX_HORIZONTAL * (width - 2) + BOX_TOP_RIGHT, attr)
        for y_axis in range(top + 1, bottom):
            stdscr.addstr(y_axis, left, BOX_VERTICAL, attr)
            stdscr.addstr(y_axis, right, BOX_VERTICAL, attr)
        stdscr.addstr(
            bottom, left, BOX_BOTTOM_LEFT + BOX_HORIZONTAL * (width - 2) + BOX_BOTTOM_RIGHT, attr
        )
    except curses.error:
        pass


def draw_frame_title(
    stdscr: "curses._CursesWindow",  # type: ignore[name-defined]
    origin_y: int,
    origin_x: int,
    width: int,
    title: str,
    attr: int = curses.A_BOLD,
) -> None:
    """Overlay a title along the top border of a frame."""
    available = max(width - 4, 0)
    if available <= 0:
        return
    try:
        stdscr.addnstr(origin_y, origin_x + 2, truncate_end(title, available), available, attr)
    except curses.error:
        pass


def truncate(text: str, max_width: int) -> str:
    """Truncate text to fit within max_width, appending ellipsis if needed."""
    if max_width <= 0:
        return ""
    if len(text) <= max_width:
        return text
    if max_width <= 3:
        return text[:max_width]
    return text[: max_width - 3] + "..."


def truncate_end(text: str, max_width: int) -> str:
    """Keep the tail of text, which is the interesting part of a path."""
    if max_width <= 0:
        return ""
    if len(text) <= max_width:
        return text
    return text[-max_width:]


def put_line(
    stdscr: "curses._CursesWindow",  # type: ignore[name-defined]
    y: int,
    x: int,
    text: str,
    width: int,
    attr: int = curses.A_NORMAL,
) -> None:
    """Write ``text`` padded to exactly ``width`` cells, ignoring edge errors."""
    if width <= 0:
        return
    try:
        stdscr.addnstr(y, x, text.ljust(width), width, attr)
    except curses.error:
        pass


__all__ = [
    "determine_column_widths",
    "draw_frame",
    "draw_frame_title",
    "put_line",
    "truncate",
    "truncate_end",
]
