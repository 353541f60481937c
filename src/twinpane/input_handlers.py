"""Turn key presses into actions for the dual pane browser."""

from __future__ import annotations

import curses
from typing import TYPE_CHECKING, Dict, Optional

from twinpane.actions import (
    Action,
    ChangeDir,
    ChangeDirToParent,
    Copy,
    CursorDown,
    CursorToFirst,
    CursorToLast,
    CursorUp,
    Delete,
    DuplicateDir,
    Edit,
    Execute,
    Move,
    OpenBookmarks,
    Quit,
    Redraw,
    Refresh,
    StartCreateDir,
    StartRename,
    StartSearch,
    SwitchSrc,
    ToggleMark,
)
from twinpane.overlays import ENTER_KEYS, Key

if TYPE_CHECKING:
    from twinpane.overlays import Overlay
    from twinpane.state import DirectoryPane

# Bindings that apply when no overlay is open and the pane declined the key
GLOBAL_KEY_BINDINGS: Dict[int, Action] = {
    ord("q"): Quit(),
    ord("\t"): SwitchSrc(),
    ord("o"): DuplicateDir(),
    ord("/"): StartSearch(),
    ord("c"): Copy(),
    ord("m"): Move(),
    ord("d"): Delete(),
    ord("i"): StartCreateDir(),
    ord("b"): OpenBookmarks(),
    ord("R"): Refresh(),
}


def pane_key_action(pane: "DirectoryPane", key_code: Key) -> Optional[Action]:
    """Return the action a pane binds to ``key_code``, or None to decline."""
    if key_code in (ord("j"), curses.KEY_DOWN):
        return CursorDown()
    if key_code in (ord("k"), curses.KEY_UP):
        return CursorUp()
    if key_code in (ord("g"), curses.KEY_HOME):
        return CursorToFirst()
    if key_code in (ord("G"), curses.KEY_END):
        return CursorToLast()
    if key_code == ord(" "):
        return ToggleMark()
    if key_code in (ord("h"), curses.KEY_LEFT):
        return ChangeDirToParent(pane.path)

    entry = pane.selected_entry()
    if key_code in (ord("l"), curses.KEY_RIGHT):
        if entry is not None and entry.is_dir:
            return ChangeDir(entry.path)
        return None
    if key_code in ENTER_KEYS:
        if entry is None:
            return ChangeDirToParent(pane.path)
        if entry.is_dir:
            return ChangeDir(entry.path)
        return Execute(entry.path)
    if key_code == ord("e"):
        return Edit(pane.path if entry is None else entry.path)
    if key_code == ord("r"):
        if entry is None:
            return None
        return StartRename(entry.name)
    return None


class InputHandlersMixin:
    """Mixin resolving raw key codes into at most one action.

    Expects the host class to provide ``overlay`` and ``_src_pane``.
    """

    overlay: Optional["Overlay"]

    def route_key(self, key_code: Key) -> Optional[Action]:
        """Resolve a key: open overlay first, then the source pane, then globals."""
        if key_code == curses.KEY_RESIZE:
            return Redraw()
        if self.overlay is not None:
            return self.overlay.on_key(key_code)
        action = pane_key_action(self._src_pane, key_code)
        if action is not None:
            return action
        return GLOBAL_KEY_BINDINGS.get(key_code)


__all__ = ["InputHandlersMixin", "GLOBAL_KEY_BINDINGS", "pane_key_action"]
