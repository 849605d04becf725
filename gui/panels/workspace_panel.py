import tkinter as tk
from tkinter import ttk

from editor.blocks import SlotKind
from editor.logger import get_logger


class WorkspacePanel:
    """Tree view of the workspace: stacks, blocks and their slots"""

    def __init__(self, main_app, parent_frame):
        self.main_app = main_app
        self.parent_frame = parent_frame
        self.font_family = main_app.gui_settings.get("font_family", "Arial")
        self.logger = get_logger()

        # Tree item id -> block, or -> (parent block, slot name) for slot rows
        self.item_blocks = {}
        self.item_slots = {}

        self.create_widgets()

    def create_widgets(self):
        tk.Label(self.parent_frame, text="WORKSPACE", font=(self.font_family, 11, 'bold'),
                 bg='white').pack(pady=3)

        tree_frame = tk.Frame(self.parent_frame, bg='white')
        tree_frame.pack(fill=tk.BOTH, expand=True, padx=5)

        self.tree = ttk.Treeview(tree_frame, show='tree', selectmode='browse')
        scrollbar = ttk.Scrollbar(tree_frame, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=scrollbar.set)
        self.tree.pack(side="left", fill="both", expand=True)
        scrollbar.pack(side="right", fill="y")
        self.tree.bind('<<TreeviewSelect>>', self.on_select)
        self.tree.tag_configure('slot', foreground='gray40')
        self.tree.tag_configure('disabled', foreground='gray60')

        button_frame = tk.Frame(self.parent_frame, bg='white')
        button_frame.pack(fill=tk.X, padx=5, pady=5)

        for text, command in (("Move Up", lambda: self.move_selected(-1)),
                              ("Move Down", lambda: self.move_selected(1)),
                              ("Enable/Disable", self.toggle_selected),
                              ("Delete", self.delete_selected)):
            tk.Button(button_frame, text=text, command=command,
                      font=(self.font_family, 9), relief=tk.RAISED, bd=2).pack(side=tk.LEFT, padx=2)

    # ── Tree ─────────────────────────────────────────────────────────────────

    def refresh(self, select=None):
        """Rebuild the tree; ``select`` is a block to highlight afterwards"""
        self.tree.delete(*self.tree.get_children())
        self.item_blocks.clear()
        self.item_slots.clear()

        for stack in self.main_app.session.workspace.ordered_stacks():
            for block in stack.blocks:
                self._insert_block('', block)

        if select is not None:
            for item, block in self.item_blocks.items():
                if block is select:
                    self.tree.see(item)
                    self.tree.selection_set(item)
                    break

    def _insert_block(self, parent_item, block):
        tags = () if block.enabled else ('disabled',)
        item = self.tree.insert(parent_item, tk.END, text=block.summary(), open=True, tags=tags)
        self.item_blocks[item] = block

        for name, kind in block.slots():
            slot_item = self.tree.insert(item, tk.END, text=f"[{name}]", open=True, tags=('slot',))
            self.item_slots[slot_item] = (block, name)
            content = block.get_slot(name)
            if kind == SlotKind.STATEMENT:
                for child in content:
                    self._insert_block(slot_item, child)
            elif content is not None:
                self._insert_block(slot_item, content)

    def get_selection(self):
        """
        Current selection.

        Returns:
            ("block", block), ("slot", (parent, slot name)) or None
        """
        selection = self.tree.selection()
        if not selection:
            return None
        item = selection[0]
        if item in self.item_blocks:
            return "block", self.item_blocks[item]
        if item in self.item_slots:
            return "slot", self.item_slots[item]
        return None

    def selected_block(self):
        selection = self.get_selection()
        if selection and selection[0] == "block":
            return selection[1]
        return None

    # ── Actions ──────────────────────────────────────────────────────────────

    def on_select(self, event=None):
        self.main_app.properties_panel.show_block(self.selected_block())

    def move_selected(self, offset):
        block = self.selected_block()
        if block is None:
            return
        if self.main_app.session.workspace.move(block, offset):
            self.main_app.on_workspace_changed(select=block)

    def toggle_selected(self):
        block = self.selected_block()
        if block is None:
            return
        block.enabled = not block.enabled
        self.logger.log_action("Toggle block", f"{block.block_type} enabled={block.enabled}", category="gui")
        self.main_app.on_workspace_changed(select=block)

    def delete_selected(self):
        block = self.selected_block()
        if block is None:
            return
        if self.main_app.session.workspace.remove(block):
            self.logger.log_action("Delete block", block.block_type, category="gui")
            self.main_app.on_workspace_changed()
