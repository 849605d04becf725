#!/usr/bin/env python3

"""
Centralized Logging System for the Robot Block Editor
=====================================================

Thread-safe, configurable logging with log levels, categories and several
output targets (console, file, GUI status bar).

Log Levels:
- DEBUG: Rendering details, serializer internals
- INFO: User actions, project state changes, file writes
- WARNING: Missing toolchain, recoverable problems
- ERROR: Failed file operations, toolchain errors
- SUCCESS: Completed saves and deploys

Categories used by the editor: blocks, generator, serializer, project,
toolchain, gui.

Usage:
    from editor.logger import get_logger

    logger = get_logger()
    logger.info("Project opened", category="project")
    logger.debug("Rendered 12 lines", category="generator")
"""

import queue
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from editor.settings import load_settings


class LogLevel:
    """Log level constants"""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    SUCCESS = 4

    NAMES = {
        0: "DEBUG",
        1: "INFO",
        2: "WARNING",
        3: "ERROR",
        4: "SUCCESS"
    }

    ICONS = {
        0: "🔍",
        1: "ℹ️",
        2: "⚠️",
        3: "🚨",
        4: "✅"
    }

    # ANSI color codes for terminal output
    COLORS = {
        0: "\033[90m",      # DEBUG - Gray
        1: "\033[97m",      # INFO - White
        2: "\033[93m",      # WARNING - Yellow
        3: "\033[91m",      # ERROR - Red
        4: "\033[92m",      # SUCCESS - Green
        "RESET": "\033[0m"
    }

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level (unknown names map to INFO)"""
        for level, name in cls.NAMES.items():
            if name == level_str.upper():
                return level
        return cls.INFO


class EditorLogger:
    """
    Centralized logger for the editor.
    Messages are queued by the caller and written by a daemon thread.
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self.config = load_settings(config_path).get("logging", {})

        self.global_level = LogLevel.from_string(self.config.get("level", "INFO"))
        self.category_levels: Dict[str, str] = dict(self.config.get("categories", {}))

        self.console_output = self.config.get("console_output", True)
        self.file_output = self.config.get("file_output", False)
        self.file_path = self.config.get("file_path", "logs/robot_block_editor.log")

        self.show_timestamps = self.config.get("show_timestamps", True)
        self.show_thread_names = self.config.get("show_thread_names", False)
        self.use_colors = self.config.get("use_colors", True)
        self.use_icons = self.config.get("use_icons", True)

        # Status bar hook installed by the GUI
        self.gui_callback: Optional[Callable[[int, str, str, datetime], None]] = None

        self.log_queue: "queue.Queue[Any]" = queue.Queue()
        self.processor_running = False
        self.processor_thread: Optional[threading.Thread] = None

        self.log_file = None
        self._setup_file_logging()

        self.start_processor()

    def _setup_file_logging(self):
        """Open the log file in append mode if file output is enabled"""
        if not self.file_output:
            return
        try:
            Path(self.file_path).parent.mkdir(parents=True, exist_ok=True)
            self.log_file = open(self.file_path, 'a', encoding='utf-8')
        except OSError as e:
            print(f"Failed to setup file logging: {e}")
            self.file_output = False

    def start_processor(self):
        """Start the log processor thread"""
        if not self.processor_running:
            self.processor_running = True
            self.processor_thread = threading.Thread(
                target=self._process_logs,
                daemon=True,
                name="LogProcessor"
            )
            self.processor_thread.start()

    def stop_processor(self):
        """Drain pending messages, stop the processor thread and close the log file"""
        self.processor_running = False
        if self.processor_thread:
            self.processor_thread.join(timeout=1.0)
        self._drain()
        if self.log_file:
            self.log_file.close()
            self.log_file = None

    def _drain(self):
        while True:
            try:
                entry = self.log_queue.get_nowait()
            except queue.Empty:
                return
            self._emit(*entry)
            self.log_queue.task_done()

    def _process_logs(self):
        """Write queued messages (runs in background thread)"""
        while self.processor_running:
            try:
                entry = self.log_queue.get(timeout=0.1)
            except queue.Empty:
                continue
            try:
                self._emit(*entry)
            except Exception as e:
                # Keep the processor alive
                print(f"Log processor error: {e}")
                time.sleep(0.1)
            finally:
                self.log_queue.task_done()

    def _emit(self, timestamp: datetime, level: int, category: str, message: str):
        formatted = self._format_message(timestamp, level, category, message)

        if self.console_output:
            print(formatted["console"])

        if self.file_output and self.log_file:
            self.log_file.write(formatted["file"] + "\n")
            self.log_file.flush()

        if self.gui_callback:
            try:
                self.gui_callback(level, category, message, timestamp)
            except Exception:
                # The status bar may already be destroyed during shutdown
                pass

    def _format_message(self, timestamp: datetime, level: int, category: str, message: str) -> Dict[str, str]:
        """Format a message for console and file output"""
        level_name = LogLevel.NAMES[level]
        level_icon = LogLevel.ICONS[level] if self.use_icons else ""

        time_str = f"[{timestamp.strftime('%H:%M:%S.%f')[:-3]}] " if self.show_timestamps else ""
        thread_str = f"[{threading.current_thread().name}] " if self.show_thread_names else ""
        category_str = f"[{category}] " if category else ""

        if self.use_colors:
            color = LogLevel.COLORS[level]
            reset = LogLevel.COLORS["RESET"]
            console_msg = f"{time_str}{thread_str}{color}{level_icon} {level_name:7}{reset} {category_str}{message}"
        else:
            console_msg = f"{time_str}{thread_str}{level_icon} {level_name:7} {category_str}{message}"

        file_msg = f"{time_str}{thread_str}{level_name:7} {category_str}{message}"

        return {
            "console": console_msg,
            "file": file_msg
        }

    def _should_log(self, level: int, category: Optional[str] = None) -> bool:
        """Category level wins over the global level"""
        if category and category in self.category_levels:
            return level >= LogLevel.from_string(self.category_levels[category])
        return level >= self.global_level

    def log(self, level: int, message: str, category: Optional[str] = None):
        """
        Log a message at specified level.

        Args:
            level: Log level (use LogLevel constants)
            message: Message to log
            category: Optional category (e.g., "project", "generator", "gui")
        """
        if not self._should_log(level, category):
            return
        self.log_queue.put((datetime.now(), level, category or "", message))

    def debug(self, message: str, category: Optional[str] = None):
        self.log(LogLevel.DEBUG, message, category)

    def info(self, message: str, category: Optional[str] = None):
        self.log(LogLevel.INFO, message, category)

    def warning(self, message: str, category: Optional[str] = None):
        self.log(LogLevel.WARNING, message, category)

    def error(self, message: str, category: Optional[str] = None):
        self.log(LogLevel.ERROR, message, category)

    def success(self, message: str, category: Optional[str] = None):
        self.log(LogLevel.SUCCESS, message, category)

    # Helper methods for common operations
    def log_action(self, action: str, details: str = "", category: Optional[str] = None):
        """Log a user action (button press, menu command)"""
        message = action
        if details:
            message += f" - {details}"
        self.info(message, category)

    def log_state_change(self, component: str, old_state: str, new_state: str, category: Optional[str] = None):
        """Log component state change"""
        self.info(f"{component}: {old_state} → {new_state}", category)

    def log_file_write(self, path: str, size: int, category: Optional[str] = None):
        """Log a file write (DEBUG level)"""
        self.debug(f"Wrote {size} characters to {path}", category or "project")

    def log_command(self, args: List[str], cwd: Optional[str] = None, category: Optional[str] = None):
        """Log an external command before it is started"""
        where = f" (in {cwd})" if cwd else ""
        self.info(f"Running: {' '.join(args)}{where}", category or "toolchain")

    def set_gui_callback(self, callback: Optional[Callable[[int, str, str, datetime], None]]):
        """Set callback function for GUI log display"""
        self.gui_callback = callback

    def set_log_level(self, level: str):
        """Change global log level at runtime"""
        self.global_level = LogLevel.from_string(level)

    def set_category_level(self, category: str, level: str):
        """Set log level for specific category"""
        self.category_levels[category] = level


# Singleton instance
_logger_instance: Optional[EditorLogger] = None
_logger_lock = threading.Lock()


def get_logger(config_path: Optional[str] = None) -> EditorLogger:
    """
    Get singleton logger instance.

    Args:
        config_path: Path to settings.json (only used on first call)

    Returns:
        EditorLogger instance
    """
    global _logger_instance

    if _logger_instance is None:
        with _logger_lock:
            if _logger_instance is None:
                _logger_instance = EditorLogger(config_path)

    return _logger_instance


def shutdown_logger():
    """Shutdown the logger (call on application exit)"""
    global _logger_instance

    if _logger_instance:
        _logger_instance.stop_processor()
        _logger_instance = None
