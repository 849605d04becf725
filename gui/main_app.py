#!/usr/bin/env python3

import tkinter as tk
from tkinter import messagebox

from editor.blocks import BlockKind
from editor.logger import get_logger, shutdown_logger
from editor.project import ProjectManager
from editor.session import Session
from editor.settings import load_settings

# Import GUI components
from gui.dialogs.tk_dialogs import TkDialogs
from gui.panels.start_panel import StartPanel
from gui.panels.toolbox_panel import ToolboxPanel
from gui.panels.workspace_panel import WorkspacePanel
from gui.panels.properties_panel import PropertiesPanel
from gui.panels.code_panel import CodePanel
from gui.panels.bottom_panel import BottomPanel


class EditorGUI:
    """Main GUI application class"""

    def __init__(self, root, settings=None):
        self.root = root
        self.settings = settings or load_settings()
        self.gui_settings = self.settings.get("gui_settings", {})
        self.logger = get_logger()

        self.root.title(self.gui_settings.get("window_title", "Robot Block Editor"))
        self.root.geometry(self.gui_settings.get("window_geometry", "1000x1000"))
        self.root.minsize(self.gui_settings.get("min_width", 900), self.gui_settings.get("min_height", 700))
        self.root.resizable(True, True)

        # Session and host operations
        output_dir_name = self.settings.get("project", {}).get("output_dir_name", "python")
        self.session = Session(output_dir_name)
        self.dialogs = TkDialogs(self.root)
        self.project_manager = ProjectManager(self.session, self.dialogs, self.settings)
        self.session.add_observer(self.on_project_state_changed)

        self.start_frame = None
        self.editor_frame = None
        self.bottom_panel = None

        self.create_start_view()
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

        # Toolchain check once the window is up
        self.root.after(100, self.detect_toolchain)

    # ── Layout ───────────────────────────────────────────────────────────────

    def create_start_view(self):
        self.start_frame = tk.Frame(self.root, bg='white')
        self.start_frame.pack(fill=tk.BOTH, expand=True)
        self.start_panel = StartPanel(self, self.start_frame)

    def create_editor_view(self):
        """Create the editor layout - toolbar, three columns, status bar"""
        if self.start_frame is not None:
            self.start_frame.destroy()
            self.start_frame = None
        if self.editor_frame is not None:
            return

        self.editor_frame = tk.Frame(self.root)
        self.editor_frame.pack(fill=tk.BOTH, expand=True)

        toolbar_frame = tk.Frame(self.editor_frame, bg='gray85')
        toolbar_frame.grid(row=0, column=0, columnspan=3, sticky="ew")
        self.create_toolbar(toolbar_frame)

        self.left_frame = tk.Frame(self.editor_frame, bg='lightgray')
        self.center_frame = tk.Frame(self.editor_frame, bg='white')
        self.right_frame = tk.Frame(self.editor_frame, bg='lightblue')
        bottom_frame = tk.Frame(self.editor_frame, bg='lightyellow')

        self.editor_frame.grid_rowconfigure(1, weight=1)
        self.editor_frame.grid_columnconfigure(0, minsize=220, weight=1)
        self.editor_frame.grid_columnconfigure(1, minsize=320, weight=2)
        self.editor_frame.grid_columnconfigure(2, minsize=340, weight=2)

        self.left_frame.grid(row=1, column=0, sticky="nsew", padx=(5, 3), pady=5)
        self.center_frame.grid(row=1, column=1, sticky="nsew", padx=3, pady=5)
        self.right_frame.grid(row=1, column=2, sticky="nsew", padx=(3, 5), pady=5)
        bottom_frame.grid(row=2, column=0, columnspan=3, sticky="ew")

        self.create_panels(bottom_frame)
        self.on_workspace_changed()

    def create_toolbar(self, parent):
        font_family = self.gui_settings.get("font_family", "Arial")
        for text, command, color in (("Save", self.save_project, 'darkblue'),
                                     ("Simulate", self.simulate, 'darkorange'),
                                     ("Deploy", self.deploy, 'darkgreen')):
            tk.Button(parent, text=text, command=command, bg=color, fg='white',
                      font=(font_family, 10, 'bold'), relief=tk.RAISED, bd=2,
                      width=10).pack(side=tk.RIGHT, padx=4, pady=4)

    def create_panels(self, bottom_frame):
        """Create and initialize all editor panels"""
        self.toolbox_panel = ToolboxPanel(self, self.left_frame)
        self.workspace_panel = WorkspacePanel(self, self.center_frame)

        right_top_frame = tk.Frame(self.right_frame, bg='lightblue')
        right_top_frame.pack(fill=tk.X)
        right_bottom_frame = tk.Frame(self.right_frame, bg='lightblue')
        right_bottom_frame.pack(fill=tk.BOTH, expand=True)

        self.properties_panel = PropertiesPanel(self, right_top_frame)
        self.code_panel = CodePanel(self, right_bottom_frame)
        self.bottom_panel = BottomPanel(self, bottom_frame)

        self.bottom_panel.set_project(self.session.project_file)
        self.bottom_panel.set_toolchain(self.session.toolchain_detected)

    # ── Editing ──────────────────────────────────────────────────────────────

    def insert_block(self, block):
        """
        Place a new block relative to the workspace selection.

        A selected slot receives the block, a selected statement block gets it
        as its next sibling; otherwise the block starts a new stack.
        """
        workspace = self.session.workspace
        selection = self.workspace_panel.get_selection()

        if selection and selection[0] == "slot":
            parent, slot = selection[1]
            if not parent.accepts(slot, block):
                messagebox.showwarning("Cannot Connect",
                                       f"'{block.LABEL}' does not fit into {slot} of '{parent.LABEL}'.")
                return
            workspace.insert(parent, slot, block)
        elif selection and block.KIND == BlockKind.STATEMENT:
            selected = selection[1]
            location = workspace.locate(selected)
            if selected.KIND == BlockKind.EVENT:
                workspace.insert(selected, selected.STATEMENT_SLOTS[0], block)
            elif selected.KIND == BlockKind.STATEMENT and location is not None and not location.is_value_slot:
                location.container.insert(location.index + 1, block)
            else:
                workspace.add_stack(block)
        else:
            workspace.add_stack(block)

        self.on_workspace_changed(select=block)

    def on_workspace_changed(self, select=None):
        """Refresh the tree and the code preview after an edit"""
        self.workspace_panel.refresh(select=select)
        self.properties_panel.show_block(select)
        self.code_panel.show_code(self.project_manager.generate_code())

    # ── Project operations ───────────────────────────────────────────────────

    def open_project(self):
        if self.project_manager.open_project():
            self.create_editor_view()

    def create_project(self):
        if self.project_manager.create_project():
            self.create_editor_view()

    def save_project(self):
        self.project_manager.save_project()

    def deploy(self):
        self.project_manager.deploy()

    def simulate(self):
        self.project_manager.simulate()

    def detect_toolchain(self):
        result = self.project_manager.detect_toolchain()
        if self.bottom_panel is not None:
            self.bottom_panel.set_toolchain(result.installed)

    def on_project_state_changed(self, old_state, new_state):
        self.root.title(f"{self.gui_settings.get('window_title', 'Robot Block Editor')} - "
                        f"{self.session.project_file}")
        if self.bottom_panel is not None:
            self.bottom_panel.set_project(self.session.project_file)

    def on_close(self):
        """Save the open project, then quit"""
        self.logger.info("Closing editor", category="gui")
        self.project_manager.close()
        shutdown_logger()
        self.root.destroy()
