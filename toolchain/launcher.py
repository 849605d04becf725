#!/usr/bin/env python3

"""Platform-specific commands for the external Python 3 interpreter"""

import sys
from typing import List, Optional


def is_windows(platform: Optional[str] = None) -> bool:
    return (platform or sys.platform) == "win32"


def python_launcher(platform: Optional[str] = None) -> List[str]:
    """``py -3`` on Windows, ``python3`` elsewhere"""
    if is_windows(platform):
        return ["py", "-3"]
    return ["python3"]


def pip_list_command(platform: Optional[str] = None) -> List[str]:
    """Command listing the installed Python packages"""
    if is_windows(platform):
        return python_launcher(platform) + ["-m", "pip", "list"]
    return ["pip3", "list"]


def robot_command(subcommand: str, companion_file: str = "robot.py",
                  platform: Optional[str] = None) -> List[str]:
    """``<launcher> robot.py <subcommand>``"""
    return python_launcher(platform) + [companion_file, subcommand]
