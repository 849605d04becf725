import tkinter as tk
from tkinter import ttk

from editor.logger import get_logger
from editor.toolbox import TOOLBOX


class ToolboxPanel:
    """Block palette: one tab per toolbox category"""

    def __init__(self, main_app, parent_frame):
        self.main_app = main_app
        self.parent_frame = parent_frame
        self.font_family = main_app.gui_settings.get("font_family", "Arial")
        self.listboxes = {}
        self.logger = get_logger()

        self.create_widgets()

    def create_widgets(self):
        tk.Label(self.parent_frame, text="BLOCKS", font=(self.font_family, 11, 'bold'),
                 bg='lightgray').pack(pady=3)

        self.notebook = ttk.Notebook(self.parent_frame)
        self.notebook.pack(fill=tk.BOTH, expand=True, padx=5, pady=3)

        for category in TOOLBOX:
            frame = tk.Frame(self.notebook, bg='lightgray')
            self.notebook.add(frame, text=category.name)

            listbox = tk.Listbox(frame, font=(self.font_family, 9), activestyle='none')
            listbox.pack(fill=tk.BOTH, expand=True)
            for entry in category.entries:
                listbox.insert(tk.END, entry.label)
            if not category.entries:
                listbox.insert(tk.END, "(no blocks)")
                listbox.config(state=tk.DISABLED)
            listbox.bind('<Double-Button-1>', lambda e, c=category: self.add_selected(c))
            self.listboxes[category.name] = listbox

        tk.Button(self.parent_frame, text="Add Block", command=self.add_current,
                  bg='darkgreen', fg='white', font=(self.font_family, 9, 'bold'),
                  relief=tk.RAISED, bd=2).pack(fill=tk.X, padx=5, pady=5)

    def add_current(self):
        """Add the block selected in the visible tab"""
        index = self.notebook.index(self.notebook.select())
        self.add_selected(TOOLBOX[index])

    def add_selected(self, category):
        listbox = self.listboxes[category.name]
        selection = listbox.curselection()
        if not selection or not category.entries:
            return
        entry = category.entries[selection[0]]
        self.logger.log_action("Add block", entry.block_type, category="gui")
        self.main_app.insert_block(entry.create())
