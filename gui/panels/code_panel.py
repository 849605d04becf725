import tkinter as tk


class CodePanel:
    """Read-only preview of the generated document"""

    def __init__(self, main_app, parent_frame):
        self.main_app = main_app
        self.parent_frame = parent_frame
        self.font_family = main_app.gui_settings.get("font_family", "Arial")
        self.code_font_family = main_app.gui_settings.get("code_font_family", "Courier")

        self.create_widgets()

    def create_widgets(self):
        tk.Label(self.parent_frame, text="GENERATED CODE", font=(self.font_family, 11, 'bold'),
                 bg='lightblue').pack(pady=3)

        text_frame = tk.Frame(self.parent_frame)
        text_frame.pack(fill=tk.BOTH, expand=True, padx=5, pady=(0, 5))

        self.text = tk.Text(text_frame, font=(self.code_font_family, 10), wrap=tk.NONE,
                            bg='#2C3E50', fg='white', insertbackground='white', state=tk.DISABLED)
        scrollbar = tk.Scrollbar(text_frame, orient="vertical", command=self.text.yview)
        self.text.configure(yscrollcommand=scrollbar.set)
        self.text.pack(side="left", fill="both", expand=True)
        scrollbar.pack(side="right", fill="y")

    def show_code(self, code):
        self.text.config(state=tk.NORMAL)
        self.text.delete('1.0', tk.END)
        self.text.insert('1.0', code)
        self.text.config(state=tk.DISABLED)
