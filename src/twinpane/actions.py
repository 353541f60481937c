"""The closed set of intents that flow from key handling into state changes.

Every action is a frozen dataclass.  Actions carry plain values (paths and
strings) and never point at live pane objects, so an action stays valid even
after the pane that produced it has been replaced.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Action:
    """Base class for every action the browser understands."""


# Navigation
@dataclass(frozen=True)
class CursorUp(Action):
    pass


@dataclass(frozen=True)
class CursorDown(Action):
    pass


@dataclass(frozen=True)
class CursorToFirst(Action):
    pass


@dataclass(frozen=True)
class CursorToLast(Action):
    pass


# Pane management
@dataclass(frozen=True)
class SwitchSrc(Action):
    pass


@dataclass(frozen=True)
class DuplicateDir(Action):
    pass


@dataclass(frozen=True)
class ChangeDir(Action):
    path: Path


@dataclass(frozen=True)
class ChangeDirToParent(Action):
    path: Path


# Selection and activation
@dataclass(frozen=True)
class ToggleMark(Action):
    pass


@dataclass(frozen=True)
class Execute(Action):
    path: Path


@dataclass(frozen=True)
class Edit(Action):
    path: Path


# Bulk operations on marked entries
@dataclass(frozen=True)
class Copy(Action):
    pass


@dataclass(frozen=True)
class Move(Action):
    pass


@dataclass(frozen=True)
class Delete(Action):
    pass


# Text input
@dataclass(frozen=True)
class StartCreateDir(Action):
    pass


@dataclass(frozen=True)
class StartRename(Action):
    name: str


@dataclass(frozen=True)
class EndInputText(Action):
    """Close the text input; ``text`` is None when the input was cancelled."""

    text: Optional[str]


# Search
@dataclass(frozen=True)
class StartSearch(Action):
    pass


@dataclass(frozen=True)
class EndSearch(Action):
    pass


@dataclass(frozen=True)
class Search(Action):
    pattern: str


# Bookmarks
@dataclass(frozen=True)
class OpenBookmarks(Action):
    pass


@dataclass(frozen=True)
class CloseBookmarks(Action):
    path: Optional[Path]


# Lifecycle
@dataclass(frozen=True)
class Refresh(Action):
    pass


@dataclass(frozen=True)
class Redraw(Action):
    """Repaint only; emitted while the user edits a text input."""


@dataclass(frozen=True)
class Quit(Action):
    pass


ALL_ACTIONS = (
    CursorUp,
    CursorDown,
    CursorToFirst,
    CursorToLast,
    SwitchSrc,
    DuplicateDir,
    ChangeDir,
    ChangeDirToParent,
    ToggleMark,
    Execute,
    Edit,
    Copy,
    Move,
    Delete,
    StartCreateDir,
    StartRename,
    EndInputText,
    StartSearch,
    EndSearch,
    Search,
    OpenBookmarks,
    CloseBookmarks,
    Refresh,
    Redraw,
    Quit,
)


__all__ = ["Action", "ALL_ACTIONS"] + [cls.__name__ for cls in ALL_ACTIONS]
