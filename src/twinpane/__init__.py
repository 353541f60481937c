"""Public interface for the dual pane browser."""

from .browser import DualPaneBrowser, DualPaneBrowserError

__version__ = "0.1.0"
__all__ = ["DualPaneBrowser", "DualPaneBrowserError", "__version__"]
