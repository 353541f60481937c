"""Start external programs without handing them the terminal."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List

LOGGER = logging.getLogger(__name__)


def launch(command: List[str], cwd: Path) -> None:
    """Spawn ``command`` in ``cwd`` and return immediately.

    The child gets its own session and no access to the terminal, so curses
    keeps running undisturbed.  The process is never waited on.

    Raises:
        OSError: If the program cannot be started.
    """
    LOGGER.info("Launching %s in %s", command, cwd)
    subprocess.Popen(
        command,
        cwd=cwd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


__all__ = ["launch"]
