from pathlib import Path

from twinpane.help_text import NORMAL_HELP, build_help_line
from twinpane.render_utils import truncate
from twinpane.modes import InputMode
from twinpane.overlays import BookmarkList, SearchLine, TextInput


def test_help_line_covers_shortcuts():
    text = build_help_line(None)

    assert text == NORMAL_HELP
    for hint in ("Enter", "Tab", "copy", "move", "delete", "mkdir", "rename", "search", "bookmarks", "q quit"):
        assert hint in text


def test_help_line_for_text_input():
    assert build_help_line(TextInput(InputMode.CREATE_DIR)).startswith("Create directory:")
    assert build_help_line(TextInput(InputMode.RENAME)).startswith("Rename:")
    assert "Esc cancel" in build_help_line(TextInput(InputMode.RENAME))


def test_help_line_for_search():
    assert build_help_line(SearchLine()).startswith("Search:")


def test_help_line_for_bookmarks():
    assert "none configured" in build_help_line(BookmarkList([]))
    assert "press a letter" in build_help_line(BookmarkList([Path("/srv")]))


def test_help_line_keeps_essential_keys_on_narrow_terminals():
    visible = truncate(build_help_line(None), 80)

    for hint in ("q quit", "Tab pane", "Space mark", "c copy", "m move", "d delete"):
        assert hint in visible
