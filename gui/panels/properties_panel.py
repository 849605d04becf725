import tkinter as tk
from tkinter import ttk, messagebox

from editor.blocks import ControlsIfBlock, DropdownField, format_number
from editor.logger import get_logger


class PropertiesPanel:
    """Field editor for the selected block"""

    def __init__(self, main_app, parent_frame):
        self.main_app = main_app
        self.parent_frame = parent_frame
        self.font_family = main_app.gui_settings.get("font_family", "Arial")
        self.block = None
        self.field_vars = {}
        self.initial_text = {}
        self.logger = get_logger()

        self.create_widgets()

    def create_widgets(self):
        tk.Label(self.parent_frame, text="PROPERTIES", font=(self.font_family, 11, 'bold'),
                 bg='lightblue').pack(pady=3)

        self.block_label = tk.Label(self.parent_frame, text="No block selected", bg='lightblue',
                                    font=(self.font_family, 9, 'italic'))
        self.block_label.pack(pady=(0, 5))

        self.fields_frame = tk.Frame(self.parent_frame, bg='lightblue')
        self.fields_frame.pack(fill=tk.X, padx=10)

    def show_block(self, block):
        """Build the editors for ``block`` (None clears the panel)"""
        self.block = block
        self.field_vars = {}
        self.initial_text = {}
        for widget in self.fields_frame.winfo_children():
            widget.destroy()

        if block is None:
            self.block_label.config(text="No block selected")
            return
        self.block_label.config(text=block.LABEL or block.block_type)

        row = 0
        for spec in block.FIELDS:
            tk.Label(self.fields_frame, text=f"{spec.label or spec.name}:", font=(self.font_family, 9),
                     bg='lightblue').grid(row=row, column=0, sticky="w", pady=2)

            value = block.get_field(spec.name)
            if isinstance(spec, DropdownField):
                var = tk.StringVar(value=spec.label_for(value))
                widget = ttk.Combobox(self.fields_frame, textvariable=var, state='readonly', width=14,
                                      values=[label for label, _ in spec.options])
            else:
                var = tk.StringVar(value=format_number(value))
                widget = tk.Entry(self.fields_frame, textvariable=var, width=14, font=(self.font_family, 9))
            widget.grid(row=row, column=1, sticky="ew", pady=2, padx=(5, 0))
            self.field_vars[spec.name] = var
            self.initial_text[spec.name] = var.get()
            row += 1

        if block.FIELDS:
            tk.Button(self.fields_frame, text="Apply", command=self.apply_fields,
                      bg='darkgreen', fg='white', font=(self.font_family, 9, 'bold'),
                      relief=tk.RAISED, bd=2).grid(row=row, column=0, columnspan=2, sticky="ew", pady=5)
            row += 1

        if isinstance(block, ControlsIfBlock):
            self.create_if_mutator(row)

        self.fields_frame.grid_columnconfigure(1, weight=1)

    def create_if_mutator(self, row):
        """else-if / else controls of a controls_if block"""
        block = self.block
        tk.Button(self.fields_frame, text="+ else if", command=lambda: self.mutate(block.add_else_if),
                  font=(self.font_family, 9)).grid(row=row, column=0, sticky="ew", pady=2)
        tk.Button(self.fields_frame, text="- else if", command=lambda: self.mutate(block.remove_else_if),
                  font=(self.font_family, 9)).grid(row=row, column=1, sticky="ew", pady=2, padx=(5, 0))

        self.else_var = tk.BooleanVar(value=block.else_body is not None)
        tk.Checkbutton(self.fields_frame, text="else", variable=self.else_var, bg='lightblue',
                       command=lambda: self.mutate(lambda: block.set_has_else(self.else_var.get()))
                       ).grid(row=row + 1, column=0, columnspan=2, sticky="w")

    def _raw_value(self, spec):
        text = self.field_vars[spec.name].get()
        if isinstance(spec, DropdownField):
            for label, value in spec.options:
                if label == text:
                    return value
        return text

    def apply_fields(self):
        """Validate the fields whose editor changed, then store them all"""
        if self.block is None:
            return

        changes = {
            spec.name: self._raw_value(spec)
            for spec in self.block.FIELDS
            if self.field_vars[spec.name].get() != self.initial_text[spec.name]
        }
        errors = self.block.update_fields(changes)
        if errors:
            self.logger.warning(f"Invalid field values: {'; '.join(errors)}", category="gui")
            messagebox.showerror("Invalid Value", "\n".join(errors))
            return

        self.logger.log_action("Edit block", self.block.summary(), category="gui")
        self.main_app.on_workspace_changed(select=self.block)

    def mutate(self, change):
        change()
        self.main_app.on_workspace_changed(select=self.block)
