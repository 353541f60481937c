"""Enumerations that describe what the text input overlay is collecting."""

from __future__ import annotations

from enum import Enum


class InputMode(Enum):
    CREATE_DIR = "create_dir"
    RENAME = "rename"

    @property
    def label(self) -> str:
        if self is InputMode.CREATE_DIR:
            return "Create directory"
        return "Rename"

    @property
    def prompt(self) -> str:
        if self is InputMode.CREATE_DIR:
            return "Dir: "
        return "Rename: "


ALL_INPUT_MODES = [InputMode.CREATE_DIR, InputMode.RENAME]


__all__ = ["InputMode", "ALL_INPUT_MODES"]
