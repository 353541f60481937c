"""Modal overlays that own the keyboard while they are open.

Each overlay turns every key into exactly one action, so a key pressed while
an overlay is open never reaches the pane or the global bindings.
"""

from __future__ import annotations

import curses
import string
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from twinpane.actions import Action, CloseBookmarks, EndInputText, EndSearch, Redraw, Search
from twinpane.modes import InputMode

ENTER_KEYS = (curses.KEY_ENTER, ord("\n"), ord("\r"))
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)
BOOKMARK_LETTERS = string.ascii_lowercase


Key = Union[int, str]


def key_to_char(key_code: Key) -> Optional[str]:
    """Return the printable character for ``key_code``, if it is one.

    Characters beyond Latin-1 arrive as one-character strings so they never
    collide with the curses special key codes.
    """
    if isinstance(key_code, str):
        return key_code if key_code.isprintable() else None
    if 0 <= key_code <= 255 and chr(key_code).isprintable():
        return chr(key_code)
    return None


class TextInput:
    """Single-line editor used for new directory names and renames."""

    def __init__(self, mode: InputMode, value: str = "") -> None:
        self.mode = mode
        self.value = value
        # For renames, the name of the entry being renamed
        self.initial_value = value

    @property
    def prompt(self) -> str:
        return self.mode.prompt

    def on_key(self, key_code: Key) -> Action:
        char = key_to_char(key_code)
        if char is not None:
            self.value += char
            return Redraw()
        if key_code in BACKSPACE_KEYS:
            self.value = self.value[:-1]
            return Redraw()
        if key_code in ENTER_KEYS:
            return EndInputText(self.value)
        return EndInputText(None)


class SearchLine:
    """Incremental search: every edit re-runs the jump from the top."""

    def __init__(self) -> None:
        self.pattern = ""

    @property
    def prompt(self) -> str:
        return "/"

    @property
    def value(self) -> str:
        return self.pattern

    def on_key(self, key_code: Key) -> Action:
        char = key_to_char(key_code)
        if char is not None:
            self.pattern += char
            return Search(self.pattern)
        if key_code in BACKSPACE_KEYS:
            self.pattern = self.pattern[:-1]
            return Search(self.pattern)
        return EndSearch()


class BookmarkList:
    """Pick one of the configured bookmarks by its letter."""

    def __init__(self, bookmarks: Sequence[Path]) -> None:
        self.bookmarks = list(bookmarks[: len(BOOKMARK_LETTERS)])

    def rows(self) -> List[Tuple[str, Path]]:
        return list(zip(BOOKMARK_LETTERS, self.bookmarks))

    def on_key(self, key_code: Key) -> Action:
        char = key_to_char(key_code)
        if char is not None and char in BOOKMARK_LETTERS:
            index = BOOKMARK_LETTERS.index(char)
            if index < len(self.bookmarks):
                return CloseBookmarks(self.bookmarks[index])
        return CloseBookmarks(None)


Overlay = Union[TextInput, SearchLine, BookmarkList]


__all__ = ["Key", "TextInput", "SearchLine", "BookmarkList", "Overlay", "key_to_char"]
