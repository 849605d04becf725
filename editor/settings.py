#!/usr/bin/env python3

"""
Settings loader for the Robot Block Editor.

All components read their configuration from config/settings.json. Missing
sections or keys fall back to DEFAULT_SETTINGS so a partial file still works.
"""

import copy
import json
import os
from typing import Any, Dict, Optional

SETTINGS_FILE = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
                             'config', 'settings.json')

DEFAULT_SETTINGS: Dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "show_timestamps": True,
        "show_thread_names": False,
        "console_output": True,
        "file_output": False,
        "file_path": "logs/robot_block_editor.log",
        "use_colors": True,
        "use_icons": True,
        "categories": {
            "blocks": "INFO",
            "generator": "INFO",
            "serializer": "INFO",
            "project": "INFO",
            "toolchain": "INFO",
            "gui": "WARNING"
        }
    },
    "project": {
        "project_file_name": "blockly.json",
        "project_extension": ".json",
        "output_dir_name": "python",
        "generated_file_name": "generated.py",
        "companion_file_name": "robot.py"
    },
    "generator": {
        "indent": "  "
    },
    "gui_settings": {
        "window_title": "Robot Block Editor",
        "window_geometry": "1000x1000",
        "min_width": 900,
        "min_height": 700,
        "font_family": "Arial",
        "code_font_family": "Courier"
    }
}


def _merge_defaults(defaults: Dict[str, Any], loaded: Dict[str, Any]) -> Dict[str, Any]:
    """Return defaults overlaid with loaded values, recursing into sections"""
    merged = copy.deepcopy(defaults)
    for key, value in loaded.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_defaults(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load settings from settings.json.

    Args:
        config_path: Path to the settings file (defaults to config/settings.json
            next to the editor package)

    Returns:
        Settings dictionary with every default section present
    """
    path = config_path or SETTINGS_FILE
    try:
        with open(path, 'r', encoding='utf-8') as f:
            loaded = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return copy.deepcopy(DEFAULT_SETTINGS)

    if not isinstance(loaded, dict):
        return copy.deepcopy(DEFAULT_SETTINGS)
    return _merge_defaults(DEFAULT_SETTINGS, loaded)
