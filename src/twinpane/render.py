"""Convert the current browser state into characters on the screen.

The functions here only read state.  Layout, from top to bottom: the two
panes side by side, one status row (status message or the open text/search
input), and one row of key hints.  The bookmark list is drawn as a popup over
the source pane.
"""

from __future__ import annotations

import curses
from typing import TYPE_CHECKING, Optional, Tuple

from twinpane.colors import ColorPair, get_entry_color, get_status_color
from twinpane.formatting import MODIFIED_PLACEHOLDER, format_modified
from twinpane.help_text import build_help_line
from twinpane.overlays import BookmarkList, SearchLine, TextInput
from twinpane.render_utils import (
    determine_column_widths,
    draw_frame,
    draw_frame_title,
    put_line,
    truncate,
)
from twinpane.state import DirectoryPane

if TYPE_CHECKING:
    from twinpane.browser import DualPaneBrowser

# Terminal size limits
MIN_TERMINAL_HEIGHT = 6
MIN_TERMINAL_WIDTH = 30

# Status row plus help row below the panes
FOOTER_ROWS = 2


def render_browser(browser: "DualPaneBrowser", stdscr: "curses._CursesWindow") -> None:  # type: ignore[name-defined]
    """Render the full dual-pane layout."""
    height, width = stdscr.getmaxyx()
    stdscr.erase()

    if height < MIN_TERMINAL_HEIGHT or width < MIN_TERMINAL_WIDTH:
        put_line(stdscr, 0, 0, "Terminal too small for browser.", width)
        stdscr.refresh()
        return

    pane_height = height - FOOTER_ROWS
    left_width = width // 2
    bounds = [(0, left_width), (left_width, width - left_width)]

    for index, pane in enumerate(browser.panes):
        origin_x, pane_width = bounds[index]
        render_pane(
            stdscr,
            pane=pane,
            origin_y=0,
            origin_x=origin_x,
            height=pane_height,
            width=pane_width,
            is_source=(index == browser.src_index),
        )

    if isinstance(browser.overlay, BookmarkList):
        origin_x, pane_width = bounds[browser.src_index]
        render_bookmarks(stdscr, browser.overlay, 0, origin_x, pane_height, pane_width)

    cursor = render_status_row(browser, stdscr, pane_height, width)
    put_line(stdscr, height - 1, 0, truncate(build_help_line(browser.overlay), width), width, curses.A_DIM)

    try:
        curses.curs_set(1 if cursor is not None else 0)
        if cursor is not None:
            stdscr.move(*cursor)
    except curses.error:
        pass

    stdscr.refresh()


def render_pane(
    stdscr: "curses._CursesWindow",  # type: ignore[name-defined]
    *,
    pane: DirectoryPane,
    origin_y: int,
    origin_x: int,
    height: int,
    width: int,
    is_source: bool,
) -> None:
    """Render one pane: the ".." row followed by its entries."""
    if height < 3 or width < 6:
        return

    frame_attr = curses.A_BOLD if is_source else curses.A_NORMAL
    draw_frame(stdscr, origin_y, origin_x, height, width, frame_attr)
    draw_frame_title(stdscr, origin_y, origin_x, width, str(pane.path), frame_attr)

    interior_width = width - 2
    viewport_height = height - 2
    name_width, size_width, modified_width = determine_column_widths(
        interior_width, len(MODIFIED_PLACEHOLDER)
    )

    # Scroll just far enough to keep the cursor row on screen
    total_rows = len(pane.entries) + 1
    scroll_offset = max(0, min(pane.selection - viewport_height + 1, total_rows - viewport_height))

    for offset in range(min(viewport_height, total_rows - scroll_offset)):
        row = scroll_offset + offset
        y = origin_y + 1 + offset
        x = origin_x + 1
        if row == 0:
            name, size, modified = "..", "", format_modified(None)
            name_attr = curses.A_BOLD
        else:
            entry = pane.entries[row - 1]
            name, size, modified = entry.display_name, entry.display_size, entry.display_modified
            name_attr = get_entry_color(entry)

        base_attr = curses.A_NORMAL
        if is_source and row == pane.selection:
            name_attr |= curses.A_REVERSE
            base_attr = curses.A_REVERSE

        put_line(stdscr, y, x, truncate(name, name_width), name_width, name_attr)
        if size_width:
            x += name_width + 1
            put_line(stdscr, y, x, size.rjust(size_width), size_width, base_attr)
        if modified_width:
            x += size_width + 1
            put_line(stdscr, y, x, modified, modified_width, base_attr)


def render_bookmarks(
    stdscr: "curses._CursesWindow",  # type: ignore[name-defined]
    bookmarks: BookmarkList,
    origin_y: int,
    origin_x: int,
    height: int,
    width: int,
) -> None:
    """Draw the lettered bookmark list over the source pane."""
    if height < 3 or width < 6:
        return

    color_attr = curses.color_pair(ColorPair.DIALOG) if curses.has_colors() else curses.A_NORMAL
    draw_frame(stdscr, origin_y, origin_x, height, width, color_attr)
    draw_frame_title(stdscr, origin_y, origin_x, width, "Bookmarks", color_attr | curses.A_BOLD)

    interior_width = width - 2
    rows = bookmarks.rows()
    for offset in range(height - 2):
        if offset < len(rows):
            letter, path = rows[offset]
            text = truncate(f"{letter}  {path}", interior_width)
        elif offset == 0:
            text = "No bookmarks configured."
        else:
            text = ""
        put_line(stdscr, origin_y + 1 + offset, origin_x + 1, text, interior_width, color_attr)


def render_status_row(
    browser: "DualPaneBrowser",
    stdscr: "curses._CursesWindow",  # type: ignore[name-defined]
    y: int,
    width: int,
) -> Optional[Tuple[int, int]]:
    """Draw the open input line or the status message.

    Returns the screen position for the text cursor when an input is open.
    """
    overlay = browser.overlay
    if isinstance(overlay, (TextInput, SearchLine)):
        text = f"{overlay.prompt}{overlay.value}"
        # Keep the end of long input visible
        visible = text[-(width - 1):]
        put_line(stdscr, y, 0, visible, width)
        return y, min(len(visible), width - 1)

    message = browser.status_message
    put_line(stdscr, y, 0, truncate(message, width), width, get_status_color(message))
    return None


__all__ = ["render_browser", "render_pane", "render_bookmarks", "render_status_row"]
