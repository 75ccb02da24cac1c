"""
Browser Viewer.

Opens a rendered report in the desktop's default web browser.
"""

from __future__ import annotations

import webbrowser
from pathlib import Path


class BrowserViewer:
    """Viewer that hands the report to the ``webbrowser`` module."""

    def __init__(self, new_tab: bool = True) -> None:
        self._new = 2 if new_tab else 0

    def open(self, path: str) -> None:
        """
        Open ``path`` as a file URI.

        Raises:
            RuntimeError: If no browser accepted the request
        """
        uri = Path(path).resolve().as_uri()
        if not webbrowser.open(uri, new=self._new):
            raise RuntimeError(f"No browser available to open {uri}")
