"""Configuration file management for twinpane.

The file is read once at startup.  Everything downstream receives the
resulting :class:`BrowserConfig`, which is frozen, so no component can change
the configuration while the browser runs.
"""

from __future__ import annotations

import copy
import logging
import os
import shlex
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore

import tomli_w

from twinpane.launcher import launch

LOGGER = logging.getLogger(__name__)

# Default configuration file location
CONFIG_FILE = Path.home() / ".twinpane.toml"

# Placeholder replaced by the target path in command templates
PATH_PLACEHOLDER = "%p"

# Bookmarks are addressed by the letters a..z
MAX_BOOKMARKS = 26

# Default configuration: no exec/edit commands, home directory bookmarked
DEFAULT_CONFIG: Dict[str, Any] = {
    "bookmarks": [str(Path.home())],
}


def load_config() -> Dict[str, Any]:
    """Load configuration from file or return defaults."""
    if not CONFIG_FILE.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(CONFIG_FILE, "rb") as f:
            config = tomllib.load(f)
        # Merge with defaults to ensure all keys exist
        return _merge_config(DEFAULT_CONFIG, config)
    except (OSError, tomllib.TOMLDecodeError) as err:
        LOGGER.warning("Ignoring unreadable config file %s: %s", CONFIG_FILE, err)
        return copy.deepcopy(DEFAULT_CONFIG)


def save_config(config: Dict[str, Any]) -> None:
    """Save configuration to file."""
    try:
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "wb") as f:
            tomli_w.dump(config, f)
    except (OSError, TypeError, ValueError) as err:
        # Don't break the app if config save fails, but inform the user
        print(f"Warning: Failed to save configuration to {CONFIG_FILE}: {err}", file=sys.stderr)


def _merge_config(default: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
    """Merge user config with defaults, preserving user values."""
    result = copy.deepcopy(default)
    for key, value in user.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_config(result[key], value)
        else:
            result[key] = value
    return result


def create_default_config() -> bool:
    """Create default configuration file if it doesn't exist.

    Returns True when a new file was written.
    """
    if CONFIG_FILE.exists():
        return False

    save_config(DEFAULT_CONFIG)
    return CONFIG_FILE.exists()


@dataclass(frozen=True)
class CommandTemplate:
    """An external program plus an argument template containing ``%p``."""

    program: str
    args: str = PATH_PLACEHOLDER

    def build(self, target: Path) -> List[str]:
        """Return the argv list with ``%p`` replaced by ``target``."""
        target_text = str(target)
        return [self.program] + [
            token.replace(PATH_PLACEHOLDER, target_text) for token in shlex.split(self.args)
        ]


@dataclass(frozen=True)
class BrowserConfig:
    """Read-only settings shared by every pane and overlay."""

    exec_command: Optional[CommandTemplate] = None
    edit_command: Optional[CommandTemplate] = None
    bookmarks: Tuple[Path, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BrowserConfig":
        """Build a config from the merged TOML dictionary, skipping bad values."""
        return cls(
            exec_command=_parse_command(data.get("exec_command"), "exec_command"),
            edit_command=_parse_command(data.get("edit_command"), "edit_command"),
            bookmarks=_parse_bookmarks(data.get("bookmarks")),
        )

    def execute(self, path: Path, cwd: Path) -> None:
        """Open ``path`` with the configured exec command, if any."""
        if self.exec_command is not None:
            launch(self.exec_command.build(path), cwd)

    def edit(self, path: Path, cwd: Path) -> None:
        """Open ``path`` with the configured edit command, if any."""
        if self.edit_command is not None:
            launch(self.edit_command.build(path), cwd)


def _parse_command(value: Any, key: str) -> Optional[CommandTemplate]:
    if value is None:
        return None
    if not isinstance(value, dict) or not isinstance(value.get("program"), str):
        LOGGER.warning("Ignoring %s: expected a table with a 'program' string", key)
        return None
    args = value.get("args", PATH_PLACEHOLDER)
    if not isinstance(args, str):
        LOGGER.warning("Ignoring %s: 'args' must be a string", key)
        return None
    try:
        shlex.split(args)
    except ValueError as err:
        LOGGER.warning("Ignoring %s: cannot parse args %r: %s", key, args, err)
        return None
    return CommandTemplate(program=value["program"], args=args)


def _parse_bookmarks(value: Any) -> Tuple[Path, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        LOGGER.warning("Ignoring bookmarks: expected a list of paths")
        return ()
    bookmarks: List[Path] = []
    for item in value:
        if not isinstance(item, str):
            LOGGER.warning("Ignoring bookmark %r: not a string", item)
            continue
        bookmarks.append(Path(os.path.abspath(Path(item).expanduser())))
    if len(bookmarks) > MAX_BOOKMARKS:
        LOGGER.warning("Only the first %d bookmarks are reachable", MAX_BOOKMARKS)
        bookmarks = bookmarks[:MAX_BOOKMARKS]
    return tuple(bookmarks)


def load_browser_config() -> BrowserConfig:
    """Read the configuration file and return the frozen settings object."""
    return BrowserConfig.from_dict(load_config())


__all__ = [
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "BrowserConfig",
    "CommandTemplate",
    "load_config",
    "save_config",
    "create_default_config",
    "load_browser_config",
]
