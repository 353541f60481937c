"""Build the one-line key hint shown at the bottom of the screen."""

from __future__ import annotations

from typing import Optional

from twinpane.overlays import BookmarkList, Overlay, SearchLine, TextInput

# Most used keys first; the line is cut at the terminal width
NORMAL_HELP = (
    "q quit | Tab pane | Space mark | c copy | m move | d delete | i mkdir | r rename | "
    "/ search | b bookmarks | e edit | Enter open | h up | o dup | R refresh | jk gG move"
)


def build_help_line(overlay: Optional[Overlay]) -> str:
    """Return the hint matching whatever currently owns the keyboard."""
    if isinstance(overlay, TextInput):
        return f"{overlay.mode.label}: Enter confirm | Bksp delete | Esc cancel"
    if isinstance(overlay, SearchLine):
        return "Search: type to jump | Bksp delete | any other key closes"
    if isinstance(overlay, BookmarkList):
        if not overlay.bookmarks:
            return "Bookmarks: none configured, any key closes"
        return "Bookmarks: press a letter to jump | any other key closes"
    return NORMAL_HELP


__all__ = ["build_help_line", "NORMAL_HELP"]
