"""Tests for applying actions to the dual pane browser."""

import curses
import time
from pathlib import Path
from unittest.mock import patch

import pytest

from twinpane.actions import (
    Action,
    ChangeDir,
    ChangeDirToParent,
    CloseBookmarks,
    Copy,
    CursorDown,
    Delete,
    DuplicateDir,
    EndInputText,
    EndSearch,
    Execute,
    Move,
    OpenBookmarks,
    Quit,
    Refresh,
    Search,
    StartCreateDir,
    StartRename,
    StartSearch,
    SwitchSrc,
    ToggleMark,
)
from twinpane.browser import WELCOME_MESSAGE, DualPaneBrowser, DualPaneBrowserError
from twinpane.config import BrowserConfig, CommandTemplate
from twinpane.jobs import JobKind, JobResult
from twinpane.overlays import BookmarkList, SearchLine, TextInput


class FakeScreen:
    """Stand-in for a curses window that replays queued key codes."""

    def __init__(self, keys=()):
        self.keys = list(keys)

    def get_wch(self):
        if not self.keys:
            raise curses.error("no input")
        return self.keys.pop(0)


class FakeJobs:
    """Job runner that hands out prepared results."""

    def __init__(self, results=()):
        self.results = list(results)

    def poll(self):
        return self.results.pop(0) if self.results else None


@pytest.fixture
def dirs(tmp_path):
    root = tmp_path.resolve()
    left, right = root / "left", root / "right"
    left.mkdir()
    right.mkdir()
    (left / "file.txt").write_text("payload", encoding="utf-8")
    (left / "sub").mkdir()
    return left, right


def _select(pane, name):
    pane.selection = next(i for i, entry in enumerate(pane.entries, start=1) if entry.name == name)


def _settle(browser, timeout=5.0):
    """Feed finished job results back into the browser until one arrives."""
    deadline = time.monotonic() + timeout
    screen = FakeScreen()
    while time.monotonic() < deadline:
        action = browser.next_action(screen)
        if action is not None:
            browser.apply(action)
            return action
        time.sleep(0.01)
    raise AssertionError("no job finished in time")


def test_start_with_missing_directory_fails(tmp_path):
    with pytest.raises(DualPaneBrowserError):
        DualPaneBrowser(tmp_path / "missing")


def test_initial_state(dirs):
    left, right = dirs
    browser = DualPaneBrowser(left, right)

    assert [pane.path for pane in browser.panes] == [left, right]
    assert browser.src_index == 0
    assert browser.overlay is None
    assert browser.status_message == WELCOME_MESSAGE
    assert browser.running


def test_right_pane_defaults_to_left_directory(dirs):
    left, _ = dirs
    browser = DualPaneBrowser(left)

    assert browser.panes[1].path == left


def test_unknown_action_is_rejected(dirs):
    browser = DualPaneBrowser(dirs[0])

    with pytest.raises(TypeError):
        browser.apply(Action())
    with pytest.raises(TypeError):
        browser.apply("q")


def test_cursor_actions_only_touch_source_pane(dirs):
    browser = DualPaneBrowser(*dirs)

    browser.apply(CursorDown())

    assert browser.panes[0].selection == 1
    assert browser.panes[1].selection == 0


def test_switch_src_flips_active_pane(dirs):
    browser = DualPaneBrowser(*dirs)

    browser.apply(SwitchSrc())
    assert browser.src_index == 1
    browser.apply(SwitchSrc())
    assert browser.src_index == 0


def test_duplicate_dir_copies_destination_path(dirs):
    left, right = dirs
    browser = DualPaneBrowser(left, right)

    browser.apply(DuplicateDir())

    assert browser.panes[0].path == right
    assert browser.panes[1].path == right


def test_change_dir_replaces_source_pane(dirs):
    left, right = dirs
    browser = DualPaneBrowser(left, right)

    browser.apply(ChangeDir(left / "sub"))

    assert browser.panes[0].path == left / "sub"
    assert browser.panes[0].selection == 0
    assert browser.panes[1].path == right


def test_change_dir_failure_keeps_pane(dirs):
    left, right = dirs
    browser = DualPaneBrowser(left, right)
    pane = browser.panes[0]

    browser.apply(ChangeDir(left / "missing"))

    assert browser.panes[0] is pane
    assert browser.status_message.startswith("Err: ")


def test_parent_highlights_previous_directory(dirs):
    left, _ = dirs
    browser = DualPaneBrowser(left / "sub")

    browser.apply(ChangeDirToParent(browser.panes[0].path))

    assert browser.panes[0].path == left
    assert browser.panes[0].selected_entry().path == left / "sub"


def test_parent_of_vanished_directory_selects_parent_row(dirs):
    left, _ = dirs
    browser = DualPaneBrowser(left)

    browser.apply(ChangeDirToParent(left / "gone"))

    assert browser.panes[0].path == left
    assert browser.panes[0].selection == 0


def test_parent_of_root_is_noop(dirs):
    browser = DualPaneBrowser(dirs[0])
    pane = browser.panes[0]

    browser.apply(ChangeDirToParent(Path("/")))

    assert browser.panes[0] is pane


def test_copy_marked_entry(dirs):
    left, right = dirs
    browser = DualPaneBrowser(left, right)
    src = browser.panes[0]
    _select(src, "file.txt")
    browser.apply(ToggleMark())
    marked = src.marked_entries()

    browser.apply(Copy())

    assert [entry.name for entry in marked] == ["file.txt"]
    assert not marked[0].marked
    assert browser.panes[0].marked_entries() == []
    assert _settle(browser) == Refresh()
    assert (right / "file.txt").read_text(encoding="utf-8") == "payload"
    assert browser.status_message == ""
    assert "file.txt" in [entry.name for entry in browser.panes[1].entries]


def test_copy_without_marks_does_nothing(dirs):
    left, right = dirs
    browser = DualPaneBrowser(left, right)
    _select(browser.panes[0], "file.txt")

    browser.apply(Copy())

    assert browser.jobs.poll() is None
    assert list(right.iterdir()) == []


def test_copy_failure_reported_on_status_line(dirs):
    left, right = dirs
    (right / "sub").mkdir()
    browser = DualPaneBrowser(left, right)
    _select(browser.panes[0], "sub")
    browser.apply(ToggleMark())

    browser.apply(Copy())
    _settle(browser)

    assert browser.status_message.startswith("Err: ")


def test_move_marked_entry(dirs):
    left, right = dirs
    browser = DualPaneBrowser(left, right)
    _select(browser.panes[0], "file.txt")
    browser.apply(ToggleMark())

    browser.apply(Move())
    _settle(browser)

    assert not (left / "file.txt").exists()
    assert (right / "file.txt").exists()
    assert [entry.name for entry in browser.panes[1].entries] == ["file.txt"]


def test_delete_marked_entries(dirs):
    left, right = dirs
    browser = DualPaneBrowser(left, right)
    browser.apply(CursorDown())
    browser.apply(ToggleMark())

    browser.apply(Delete())
    _settle(browser)

    assert not (left / "sub").exists()
    assert [entry.name for entry in browser.panes[0].entries] == ["file.txt"]


def test_create_dir_through_text_input(dirs):
    left, _ = dirs
    browser = DualPaneBrowser(left)

    browser.apply(StartCreateDir())
    assert isinstance(browser.overlay, TextInput)
    browser.apply(EndInputText("made"))

    assert browser.overlay is None
    assert (left / "made").is_dir()
    assert "made" in [entry.name for entry in browser.panes[0].entries]


def test_empty_text_input_changes_nothing(dirs):
    left, _ = dirs
    browser = DualPaneBrowser(left)
    before = sorted(left.iterdir())

    browser.apply(StartCreateDir())
    browser.apply(EndInputText(""))
    browser.apply(StartCreateDir())
    browser.apply(EndInputText(None))

    assert browser.overlay is None
    assert sorted(left.iterdir()) == before


def test_create_dir_failure_reported(dirs):
    left, _ = dirs
    browser = DualPaneBrowser(left)

    browser.apply(StartCreateDir())
    browser.apply(EndInputText("sub"))

    assert browser.overlay is None
    assert browser.status_message.startswith("Err: ")


def test_rename_through_text_input(dirs):
    left, _ = dirs
    browser = DualPaneBrowser(left)
    _select(browser.panes[0], "file.txt")

    browser.apply(StartRename("file.txt"))
    assert browser.overlay.value == "file.txt"
    browser.apply(EndInputText("renamed.txt"))

    assert (left / "renamed.txt").exists()
    assert not (left / "file.txt").exists()


def test_rename_onto_existing_entry_reported(dirs):
    left, _ = dirs
    browser = DualPaneBrowser(left)
    _select(browser.panes[0], "file.txt")

    browser.apply(StartRename("file.txt"))
    browser.apply(EndInputText("sub"))

    assert (left / "file.txt").exists()
    assert browser.status_message.startswith("Err: ")


def test_search_overlay_lifecycle(dirs):
    left, _ = dirs
    browser = DualPaneBrowser(left)

    browser.apply(StartSearch())
    assert isinstance(browser.overlay, SearchLine)
    browser.apply(Search("fi"))
    assert browser.panes[0].selected_entry().name == "file.txt"
    browser.apply(EndSearch())
    assert browser.overlay is None


def test_bookmark_jump(dirs):
    left, right = dirs
    browser = DualPaneBrowser(left, config=BrowserConfig(bookmarks=(right,)))

    browser.apply(OpenBookmarks())
    assert isinstance(browser.overlay, BookmarkList)
    browser.apply(browser.route_key(ord("a")))

    assert browser.overlay is None
    assert browser.panes[0].path == right


def test_bookmark_cancel_keeps_directory(dirs):
    left, right = dirs
    browser = DualPaneBrowser(left, config=BrowserConfig(bookmarks=(right,)))

    browser.apply(OpenBookmarks())
    browser.apply(CloseBookmarks(None))

    assert browser.overlay is None
    assert browser.panes[0].path == left


def test_execute_failure_reported(dirs):
    left, _ = dirs
    config = BrowserConfig(exec_command=CommandTemplate("no-such-program"))
    browser = DualPaneBrowser(left, config=config)

    with patch("twinpane.config.launch", side_effect=FileNotFoundError("no-such-program")):
        browser.apply(Execute(left / "file.txt"))

    assert browser.status_message == "Err: no-such-program"


def test_refresh_rereads_both_panes(dirs):
    left, right = dirs
    browser = DualPaneBrowser(left, right)
    (right / "new.txt").write_text("x", encoding="utf-8")

    browser.apply(Refresh())

    assert [entry.name for entry in browser.panes[1].entries] == ["new.txt"]


def test_quit_stops_loop(dirs):
    browser = DualPaneBrowser(dirs[0])

    browser.apply(Quit())

    assert browser.running is False


def test_next_action_drains_one_result_per_call(dirs):
    left, _ = dirs
    results = [
        JobResult(1, JobKind.COPY, left / "a", error="disk full"),
        JobResult(2, JobKind.COPY, left / "b"),
    ]
    browser = DualPaneBrowser(left, jobs=FakeJobs(results))
    screen = FakeScreen(["q"])

    assert browser.next_action(screen) == Refresh()
    assert browser.status_message == "Err: disk full"
    assert browser.next_action(screen) == Refresh()
    assert browser.status_message == ""
    assert browser.next_action(screen) == Quit()
    assert browser.next_action(screen) is None


def test_relative_bookmark_becomes_absolute(dirs, monkeypatch):
    left, _ = dirs
    monkeypatch.chdir(left)
    browser = DualPaneBrowser(left, config=BrowserConfig(bookmarks=(Path("sub"),)))

    browser.apply(OpenBookmarks())
    browser.apply(CloseBookmarks(Path("sub")))
    assert browser.panes[0].path == left / "sub"

    browser.apply(ChangeDirToParent(browser.panes[0].path))
    browser.apply(ChangeDirToParent(browser.panes[0].path))

    assert browser.panes[0].path == left.parent
    assert browser.panes[0].path.is_absolute()


def test_rename_targets_entry_named_when_input_opened(dirs):
    left, _ = dirs
    browser = DualPaneBrowser(left)
    _select(browser.panes[0], "file.txt")
    browser.apply(StartRename("file.txt"))

    # A finished job refreshes the pane while the name is being typed
    (left / "aaa.txt").write_text("x", encoding="utf-8")
    browser.apply(Refresh())
    browser.apply(EndInputText("renamed.txt"))

    assert (left / "renamed.txt").read_text(encoding="utf-8") == "payload"
    assert (left / "aaa.txt").exists()


def test_next_action_reads_wide_characters(dirs):
    left, _ = dirs
    browser = DualPaneBrowser(left, jobs=FakeJobs())
    browser.apply(StartCreateDir())
    screen = FakeScreen(["c", "é", "ř", "\n"])

    actions = [browser.next_action(screen) for _ in range(4)]
    browser.apply(actions[-1])

    assert actions[-1] == EndInputText("céř")
    assert (left / "céř").is_dir()


def test_next_action_passes_special_keys_through(dirs):
    left, _ = dirs
    browser = DualPaneBrowser(left, jobs=FakeJobs())

    assert browser.next_action(FakeScreen([curses.KEY_DOWN])) == CursorDown()
    assert browser.next_action(FakeScreen(["\t"])) == SwitchSrc()
