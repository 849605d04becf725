#!/usr/bin/env python3

"""
Tk Dialogs
==========

tkinter implementation of the editor's Dialogs interface.
"""

import tkinter as tk
from tkinter import filedialog, messagebox
from typing import Optional


class TkDialogs:
    """Modal file pickers and message boxes parented to the editor window"""

    def __init__(self, parent: tk.Tk):
        self.parent = parent

    def ask_open_file(self) -> Optional[str]:
        file_path = filedialog.askopenfilename(
            parent=self.parent,
            title="Open Project",
            filetypes=[("Project files", "*.json"), ("All files", "*.*")]
        )
        return file_path or None

    def ask_directory(self) -> Optional[str]:
        directory = filedialog.askdirectory(parent=self.parent, title="Select Project Directory")
        return directory or None

    def show_error(self, title: str, message: str) -> None:
        messagebox.showerror(title, message, parent=self.parent)

    def show_warning(self, message: str) -> None:
        messagebox.showwarning("Warning", message, parent=self.parent)
