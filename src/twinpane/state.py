"""Directory pane state and entry models."""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from twinpane.actions import (
    Action,
    CursorDown,
    CursorToFirst,
    CursorToLast,
    CursorUp,
    Edit,
    Execute,
    Search,
    ToggleMark,
)
from twinpane.config import BrowserConfig
from twinpane.formatting import format_modified, format_size

LOGGER = logging.getLogger(__name__)

# Row 0 is the synthetic ".." entry; real entries start at row 1.
PARENT_ROW = 0


class PaneStateError(Exception):
    """Raised when a directory cannot be listed."""


@dataclass
class PaneEntry:
    path: Path
    is_dir: bool
    is_symlink: bool = False
    size: Optional[int] = None
    modified: Optional[datetime] = None
    marked: bool = False

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def display_name(self) -> str:
        """Return the text shown for the entry."""
        suffix = "/" if self.is_dir else ""
        return f"{self.name}{suffix}"

    @property
    def display_size(self) -> str:
        if self.size is None:
            return "-"
        return format_size(self.size)

    @property
    def display_modified(self) -> str:
        return format_modified(self.modified)


def _sort_key(entry: PaneEntry):
    """Directories come first, then everything by path."""
    return (0 if entry.is_dir else 1, entry.path)


def _build_entry(dir_entry: os.DirEntry) -> Optional[PaneEntry]:
    """Turn a scandir result into a pane entry, or None if it cannot be stat'ed."""
    try:
        is_symlink = dir_entry.is_symlink()
        try:
            stat_info = dir_entry.stat()
        except OSError:
            # Dangling symlinks still appear, described by the link itself
            stat_info = dir_entry.stat(follow_symlinks=False)
    except OSError as err:
        LOGGER.debug("Dropping %s from listing: %s", dir_entry.path, err)
        return None

    is_dir = stat.S_ISDIR(stat_info.st_mode)
    return PaneEntry(
        path=Path(dir_entry.path),
        is_dir=is_dir,
        is_symlink=is_symlink,
        size=None if is_dir else stat_info.st_size,
        modified=datetime.fromtimestamp(stat_info.st_mtime),
    )


def list_entries(path: Path) -> List[PaneEntry]:
    """Read ``path`` and return its entries in display order.

    Raises:
        PaneStateError: If the directory itself cannot be read.
    """
    try:
        with os.scandir(path) as iterator:
            candidates = list(iterator)
    except PermissionError as err:
        raise PaneStateError(f"Permission denied reading directory: {path}") from err
    except FileNotFoundError as err:
        raise PaneStateError(f"Directory not found: {path}") from err
    except OSError as err:
        raise PaneStateError(f"Cannot read directory {path}: {err.strerror or err}") from err

    entries = [entry for entry in map(_build_entry, candidates) if entry is not None]
    entries.sort(key=_sort_key)
    return entries


class DirectoryPane:
    """One directory view: its listing, cursor row and marks.

    ``selection`` is a row number.  Row 0 is the ".." row and rows
    ``1..len(entries)`` map to ``entries[row - 1]``, so
    ``0 <= selection <= len(entries)`` always holds.
    """

    def __init__(
        self,
        path: Path,
        config: BrowserConfig,
        entries: Optional[List[PaneEntry]] = None,
        selection: int = PARENT_ROW,
    ) -> None:
        self.path = path
        self.config = config
        self.entries: List[PaneEntry] = entries if entries is not None else []
        self.selection = max(PARENT_ROW, min(selection, len(self.entries)))

    @classmethod
    def open(
        cls,
        path: Path,
        config: BrowserConfig,
        *,
        select_path: Optional[Path] = None,
    ) -> "DirectoryPane":
        """List ``path`` and optionally pre-select the row for ``select_path``.

        Relative paths are made absolute against the working directory.
        """
        path = Path(os.path.abspath(path.expanduser()))
        entries = list_entries(path)
        selection = PARENT_ROW
        if select_path is not None:
            for index, entry in enumerate(entries):
                if entry.path == select_path:
                    selection = index + 1
                    break
        return cls(path, config, entries, selection)

    def refresh(self) -> None:
        """Re-list the directory, keeping the cursor row where possible."""
        try:
            entries = list_entries(self.path)
        except PaneStateError as err:
            LOGGER.warning("Refresh of %s failed: %s", self.path, err)
            entries = []
        self.entries = entries
        self.selection = min(self.selection, len(self.entries))

    def selected_entry(self) -> Optional[PaneEntry]:
        """Return the highlighted entry, or None on the ".." row."""
        if self.selection == PARENT_ROW:
            return None
        return self.entries[self.selection - 1]

    # Cursor movement

    def cursor_down(self) -> None:
        self.selection = min(self.selection + 1, len(self.entries))

    def cursor_up(self) -> None:
        self.selection = max(self.selection - 1, PARENT_ROW)

    def cursor_to_first(self) -> None:
        self.selection = PARENT_ROW

    def cursor_to_last(self) -> None:
        self.selection = len(self.entries)

    # Marks

    def toggle_mark(self) -> None:
        """Flip the mark on the selected entry and advance one row."""
        entry = self.selected_entry()
        if entry is not None:
            entry.marked = not entry.marked
        self.cursor_down()

    def marked_entries(self) -> List[PaneEntry]:
        return [entry for entry in self.entries if entry.marked]

    def take_marked(self) -> List[PaneEntry]:
        """Return the marked entries and clear their marks."""
        marked = self.marked_entries()
        for entry in marked:
            entry.marked = False
        return marked

    def search(self, pattern: str) -> None:
        """Jump to the first entry whose name starts with ``pattern``.

        Matching ignores case and always scans from the top; when nothing
        matches the cursor stays put.
        """
        folded = pattern.casefold()
        for index, entry in enumerate(self.entries):
            if entry.name.casefold().startswith(folded):
                self.selection = index + 1
                return

    # Filesystem changes made directly from the UI thread

    def create_dir(self, name: str) -> Path:
        """Create ``name`` inside this directory and return its path."""
        target = self.path / name
        target.mkdir()
        LOGGER.info("Created directory %s", target)
        return target

    def rename(self, new_name: str, current_name: Optional[str] = None) -> Optional[Path]:
        """Rename an entry within this directory.

        ``current_name`` names the entry to rename, so a listing refreshed
        while the name was typed cannot redirect it.  Without it the selected
        entry is renamed, and the ".." row does nothing.  Refuses to replace
        an existing entry.
        """
        if current_name:
            source = self.path / current_name
        else:
            entry = self.selected_entry()
            if entry is None:
                return None
            source = entry.path
        target = self.path / new_name
        if target == source:
            return target
        if target.exists() or target.is_symlink():
            raise FileExistsError(f"'{new_name}' already exists.")
        source.rename(target)
        LOGGER.info("Renamed %s to %s", source, target)
        return target

    def on_dispatch(self, action: Action) -> None:
        """Apply the pane-local part of ``action``; other actions are ignored."""
        if isinstance(action, CursorDown):
            self.cursor_down()
        elif isinstance(action, CursorUp):
            self.cursor_up()
        elif isinstance(action, CursorToFirst):
            self.cursor_to_first()
        elif isinstance(action, CursorToLast):
            self.cursor_to_last()
        elif isinstance(action, ToggleMark):
            self.toggle_mark()
        elif isinstance(action, Search):
            self.search(action.pattern)
        elif isinstance(action, Execute):
            self.config.execute(action.path, self.path)
        elif isinstance(action, Edit):
            self.config.edit(action.path, self.path)


__all__ = ["PaneEntry", "DirectoryPane", "PaneStateError", "list_entries", "PARENT_ROW"]
