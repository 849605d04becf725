import queue
import tkinter as tk

from editor.logger import LogLevel, get_logger


class BottomPanel:
    """Bottom panel for project, toolchain and last log message"""

    UPDATE_INTERVAL = 300

    STATUS_COLORS = {
        LogLevel.INFO: 'black',
        LogLevel.WARNING: 'darkorange',
        LogLevel.ERROR: 'darkred',
        LogLevel.SUCCESS: 'darkgreen'
    }

    def __init__(self, main_app, parent_frame):
        self.main_app = main_app
        self.parent_frame = parent_frame
        self.font_family = main_app.gui_settings.get("font_family", "Arial")
        # Filled by the logger thread, drained on the Tk loop
        self.messages = queue.Queue()

        self.create_widgets()
        get_logger().set_gui_callback(self.on_log_message)
        self.schedule_update()

    def create_widgets(self):
        tk.Label(self.parent_frame, text="STATUS:", font=(self.font_family, 10, 'bold'),
                 bg='lightyellow', fg='darkgreen').pack(side=tk.LEFT, padx=8)

        self.project_label = tk.Label(self.parent_frame, text="No project open", bg='lightyellow',
                                      fg='darkblue', font=(self.font_family, 9, 'bold'), anchor='w')
        self.project_label.pack(side=tk.LEFT, padx=8)

        self.toolchain_label = tk.Label(self.parent_frame, text="RobotPy: checking...", bg='lightyellow',
                                        fg='gray30', font=(self.font_family, 9))
        self.toolchain_label.pack(side=tk.RIGHT, padx=8)

        self.message_label = tk.Label(self.parent_frame, text="", bg='lightyellow',
                                      font=(self.font_family, 9), anchor='w')
        self.message_label.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=8)

    def set_project(self, project_file):
        self.project_label.config(text=project_file or "No project open")

    def set_toolchain(self, detected):
        if detected:
            self.toolchain_label.config(text="RobotPy: detected", fg='darkgreen')
        else:
            self.toolchain_label.config(text="RobotPy: not detected", fg='darkred')

    def on_log_message(self, level, category, message, timestamp):
        if level >= LogLevel.INFO:
            self.messages.put((level, message))

    def schedule_update(self):
        """Show the newest queued log message"""
        latest = None
        while True:
            try:
                latest = self.messages.get_nowait()
            except queue.Empty:
                break
        if latest is not None:
            level, message = latest
            self.message_label.config(text=message.splitlines()[0] if message else "",
                                      fg=self.STATUS_COLORS.get(level, 'black'))
        self.main_app.root.after(self.UPDATE_INTERVAL, self.schedule_update)
