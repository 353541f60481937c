"""Core dual pane browser logic."""

from __future__ import annotations

import curses
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from twinpane.actions import (
    ALL_ACTIONS,
    Action,
    ChangeDir,
    ChangeDirToParent,
    CloseBookmarks,
    Copy,
    Delete,
    DuplicateDir,
    EndInputText,
    EndSearch,
    Move,
    OpenBookmarks,
    Quit,
    Refresh,
    StartCreateDir,
    StartRename,
    StartSearch,
    SwitchSrc,
)
from twinpane.colors import init_colors
from twinpane.config import BrowserConfig
from twinpane.input_handlers import InputHandlersMixin
from twinpane.jobs import ERROR_PREFIX, JobRunner
from twinpane.modes import InputMode
from twinpane.overlays import BookmarkList, Overlay, SearchLine, TextInput
from twinpane.render import render_browser
from twinpane.state import DirectoryPane, PaneStateError

LOGGER = logging.getLogger(__name__)

# How long get_wch() waits for a key before the loop checks for job results
POLL_INTERVAL_MS = 100

WELCOME_MESSAGE = "Welcome."


class DualPaneBrowserError(Exception):
    """Raised when the dual pane browser cannot start."""


class DualPaneBrowser(InputHandlersMixin):
    """Display two directories side-by-side in a curses interface.

    The browser owns both panes, the single overlay slot and the status
    message.  Key presses become actions through :class:`InputHandlersMixin`;
    :meth:`apply` is the only place where an action changes state.
    """

    def __init__(
        self,
        left_root: Path,
        right_root: Optional[Path] = None,
        *,
        config: Optional[BrowserConfig] = None,
        jobs: Optional[JobRunner] = None,
    ) -> None:
        self.config = config if config is not None else BrowserConfig()
        self.jobs = jobs if jobs is not None else JobRunner()
        left_path = left_root.expanduser().resolve()
        right_path = (right_root or left_root).expanduser().resolve()
        try:
            self.panes: List[DirectoryPane] = [
                DirectoryPane.open(left_path, self.config),
                DirectoryPane.open(right_path, self.config),
            ]
        except PaneStateError as err:
            raise DualPaneBrowserError(str(err)) from err
        self.src_index = 0
        self.overlay: Optional[Overlay] = None
        self.status_message = WELCOME_MESSAGE
        self.running = True

    @property
    def _src_pane(self) -> DirectoryPane:
        """The active pane: origin of every operation."""
        return self.panes[self.src_index]

    @property
    def _dest_pane(self) -> DirectoryPane:
        """The inactive pane: target of copy and move."""
        return self.panes[1 - self.src_index]

    def push_message(self, message: str) -> None:
        self.status_message = message

    def apply(self, action: Action) -> None:
        """Apply ``action``: first the source pane's part, then global effects.

        Both phases see the pane that was active when the action arrived.
        """
        if not isinstance(action, ALL_ACTIONS):
            raise TypeError(f"Unknown action: {action!r}")

        src = self._src_pane
        try:
            src.on_dispatch(action)
        except OSError as err:
            self._report_error(err)

        if isinstance(action, Refresh):
            for pane in self.panes:
                pane.refresh()
        elif isinstance(action, SwitchSrc):
            self.src_index = 1 - self.src_index
        elif isinstance(action, DuplicateDir):
            self._replace_src(self._dest_pane.path)
        elif isinstance(action, ChangeDir):
            self._replace_src(action.path)
        elif isinstance(action, ChangeDirToParent):
            parent = action.path.parent
            if parent != action.path:
                self._replace_src(parent, select_path=action.path)
        elif isinstance(action, Copy):
            self.jobs.copy(src.take_marked(), self._dest_pane.path)
            src.refresh()
        elif isinstance(action, Move):
            self.jobs.move(src.take_marked(), self._dest_pane.path)
            src.refresh()
            self._dest_pane.refresh()
        elif isinstance(action, Delete):
            self.jobs.delete(src.take_marked())
            src.refresh()
        elif isinstance(action, StartCreateDir):
            self.overlay = TextInput(InputMode.CREATE_DIR)
        elif isinstance(action, StartRename):
            self.overlay = TextInput(InputMode.RENAME, action.name)
        elif isinstance(action, EndInputText):
            self._end_input_text(src, action.text)
        elif isinstance(action, StartSearch):
            self.overlay = SearchLine()
        elif isinstance(action, EndSearch):
            if isinstance(self.overlay, SearchLine):
                self.overlay = None
        elif isinstance(action, OpenBookmarks):
            self.overlay = BookmarkList(self.config.bookmarks)
        elif isinstance(action, CloseBookmarks):
            if isinstance(self.overlay, BookmarkList):
                self.overlay = None
            if action.path is not None:
                self._replace_src(action.path)
        elif isinstance(action, Quit):
            self.running = False

    def _end_input_text(self, src: DirectoryPane, text: Optional[str]) -> None:
        """Close the text input and, for non-empty text, create or rename."""
        overlay = self.overlay
        if isinstance(overlay, TextInput):
            self.overlay = None
        if not text or not isinstance(overlay, TextInput):
            return
        try:
            if overlay.mode is InputMode.CREATE_DIR:
                src.create_dir(text)
            else:
                src.rename(text, current_name=overlay.initial_value)
        except OSError as err:
            self._report_error(err)
        src.refresh()

    def _replace_src(self, path: Path, *, select_path: Optional[Path] = None) -> None:
        """Swap in a fresh listing of ``path``; keep the current pane on failure."""
        try:
            pane = DirectoryPane.open(path, self.config, select_path=select_path)
        except PaneStateError as err:
            self._report_error(err)
            return
        self.panes[self.src_index] = pane

    def _report_error(self, err: Exception) -> None:
        LOGGER.warning("%s", err)
        self.status_message = f"{ERROR_PREFIX}{err}"

    def next_action(self, stdscr: "curses._CursesWindow") -> Optional[Action]:  # type: ignore[name-defined]
        """Produce the next action: a finished job first, otherwise a key press.

        At most one job result is taken per call.  It becomes the status
        message and triggers a refresh of both panes.
        """
        result = self.jobs.poll()
        if result is not None:
            self.push_message(result.message)
            return Refresh()
        try:
            key = stdscr.get_wch()
        except curses.error:
            # No key before the poll timeout
            return None
        if isinstance(key, str) and ord(key) <= 255:
            key = ord(key)
        return self.route_key(key)

    def browse(self) -> Tuple[Path, Path]:
        """Launch the UI and return the final left and right directories."""
        try:
            return curses.wrapper(self._loop)
        except curses.error as err:
            raise DualPaneBrowserError("Failed to initialise curses UI.") from err

    def _loop(self, stdscr: "curses._CursesWindow") -> Tuple[Path, Path]:  # type: ignore[name-defined]
        """Main curses event loop."""
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        stdscr.keypad(True)
        stdscr.timeout(POLL_INTERVAL_MS)
        init_colors()

        while self.running:
            render_browser(self, stdscr)
            action = self.next_action(stdscr)
            if action is not None:
                self.apply(action)

        return self.panes[0].path, self.panes[1].path


__all__ = ["DualPaneBrowser", "DualPaneBrowserError", "POLL_INTERVAL_MS"]
