#!/usr/bin/env python3

import tkinter as tk
import sys
import os

# Add the current directory to the Python path so we can import our modules
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from editor.logger import get_logger, shutdown_logger
from gui.main_app import EditorGUI


def main():
    """Main entry point for the Robot Block Editor"""
    logger = get_logger()
    root = tk.Tk()
    EditorGUI(root)

    try:
        root.mainloop()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user", category="gui")
    finally:
        shutdown_logger()


if __name__ == "__main__":
    main()
