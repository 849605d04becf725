"""
Dialog interface used by the project operations.

The GUI implements it with tkinter dialogs (gui/dialogs/tk_dialogs.py);
tests pass in a recording fake.
"""
from typing import Optional, Protocol


class Dialogs(Protocol):

    def ask_open_file(self) -> Optional[str]:
        """Ask for an existing file; None when cancelled"""

    def ask_directory(self) -> Optional[str]:
        """Ask for a directory; None when cancelled"""

    def show_error(self, title: str, message: str) -> None:
        """Modal error box"""

    def show_warning(self, message: str) -> None:
        """Modal warning message"""
