"""Command-line entry point for twinpane.

The steps are deliberately simple:

1. Read the command line (optional start directories, ``--version``,
   ``--init-config``).
2. Set up diagnostic logging when ``TWINPANE_DEBUG`` is set.
3. Load the configuration file once and launch the curses browser.
4. Print where the panes ended up, or record crash information.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import traceback
from datetime import datetime
from pathlib import Path

from twinpane import DualPaneBrowser, DualPaneBrowserError, __version__
from twinpane import config

# Crash dump file location
CRASH_LOG_FILE = Path.home() / "twinpane.crash.txt"

# Diagnostic log, only written when TWINPANE_DEBUG is set
DEFAULT_LOG_FILE = Path.home() / "twinpane.log"

# Shorten the pause curses inserts after Esc before reporting it
ESC_DELAY_MS = "25"


def configure_logging() -> None:
    """Send log records to a file when ``TWINPANE_DEBUG`` is set.

    curses owns the terminal while the browser runs, so records never go to
    stderr.  Without the variable logging stays unconfigured and silent.
    """
    if not os.environ.get("TWINPANE_DEBUG"):
        return
    log_file = os.environ.get("TWINPANE_LOG_FILE") or str(DEFAULT_LOG_FILE)
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(threadName)s %(name)s: %(message)s",
    )


def write_crash_log(exception: BaseException) -> None:
    """Append a crash report to :data:`CRASH_LOG_FILE`."""
    try:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        crash_info = f"""
================================================================================
twinpane Crash Report
================================================================================
Timestamp: {timestamp}
Version: {__version__}
Python: {sys.version}
Platform: {sys.platform}

Exception Type: {type(exception).__name__}
Exception Message: {exception}

Traceback:
{traceback.format_exc()}
================================================================================
"""
        with open(CRASH_LOG_FILE, "a") as f:
            f.write(crash_info)

        print("\ntwinpane crashed unexpectedly!", file=sys.stderr)
        print(f"   Crash details saved to: {CRASH_LOG_FILE}", file=sys.stderr)
    except OSError:
        print("\ntwinpane crashed and could not write crash log!", file=sys.stderr)
        traceback.print_exc()


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments for the browser."""
    parser = argparse.ArgumentParser(
        prog="twinpane",
        description="Browse two directories side-by-side and copy, move or delete marked entries.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version number and exit.",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help=f"Write a default configuration file to {config.CONFIG_FILE} and exit.",
    )
    parser.add_argument(
        "left_directory",
        nargs="?",
        default=None,
        help="Path for the left pane (default: current directory).",
    )
    parser.add_argument(
        "right_directory",
        nargs="?",
        default=None,
        help="Path for the right pane (default: same as the left pane).",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Launch the dual-pane browser."""
    try:
        args = parse_args(argv)

        if args.init_config:
            if config.CONFIG_FILE.exists():
                print(f"Configuration already exists at {config.CONFIG_FILE}")
                return 0
            if not config.create_default_config():
                return 1
            print(f"Wrote default configuration to {config.CONFIG_FILE}")
            return 0

        if not sys.stdout.isatty():
            print("The dual-pane browser requires an interactive terminal.")
            return 1

        configure_logging()
        os.environ.setdefault("ESCDELAY", ESC_DELAY_MS)

        left = Path(args.left_directory or ".")
        right = Path(args.right_directory) if args.right_directory else None

        browser = DualPaneBrowser(left, right, config=config.load_browser_config())
        final_left, final_right = browser.browse()

        print(f"Final left pane directory: {final_left}")
        print(f"Final right pane directory: {final_right}")
        return 0

    except DualPaneBrowserError as err:
        print(f"Could not start browser: {err}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT
    except Exception as e:
        write_crash_log(e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
