import tkinter as tk


class StartPanel:
    """Start view: open an existing project or create a new one"""

    def __init__(self, main_app, parent_frame):
        self.main_app = main_app
        self.parent_frame = parent_frame
        self.font_family = main_app.gui_settings.get("font_family", "Arial")

        self.create_widgets()

    def create_widgets(self):
        """Create the title and the two project buttons"""
        container = tk.Frame(self.parent_frame, bg='white')
        container.place(relx=0.5, rely=0.4, anchor='center')

        tk.Label(container, text=self.main_app.gui_settings.get("window_title", "Robot Block Editor"),
                 font=(self.font_family, 20, 'bold'), bg='white', fg='darkblue').pack(pady=(0, 20))

        tk.Button(container, text="Open Project", command=self.main_app.open_project, width=20,
                  bg='darkgreen', fg='white', font=(self.font_family, 11, 'bold'),
                  relief=tk.RAISED, bd=2, activebackground='green',
                  activeforeground='white').pack(pady=5)

        tk.Button(container, text="Create Project", command=self.main_app.create_project, width=20,
                  bg='darkblue', fg='white', font=(self.font_family, 11, 'bold'),
                  relief=tk.RAISED, bd=2, activebackground='blue',
                  activeforeground='white').pack(pady=5)
