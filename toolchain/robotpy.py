#!/usr/bin/env python3

"""
RobotPy toolchain access.

Detection runs the platform's pip listing once at start-up; the deploy and
sim subcommands run the companion robot.py in the generated output directory.
Calls are synchronous, without timeout; a failed run is recognised only by a
non-empty error stream. Output is decoded with replacement characters so that
undecodable bytes still reach the user.
"""

import subprocess
from typing import Optional

from editor.logger import get_logger
from toolchain.launcher import pip_list_command, robot_command

logger = get_logger()

DEPLOY = "deploy"
SIM = "sim"
SUBCOMMANDS = (DEPLOY, SIM)

PYTHON_MISSING = "Python 3 install not detected."
ROBOTPY_MISSING = "RobotPy install not detected."


class DetectionResult:
    """Outcome of the toolchain check"""

    def __init__(self, installed: bool, warning: Optional[str] = None):
        self.installed = installed
        self.warning = warning

    def __repr__(self):
        return f"DetectionResult(installed={self.installed}, warning={self.warning!r})"


def detect_robotpy(platform: Optional[str] = None) -> DetectionResult:
    """
    Check for a Python 3 install with RobotPy.

    Returns:
        DetectionResult; ``warning`` holds the message to show the user
    """
    command = pip_list_command(platform)
    logger.log_command(command, category="toolchain")
    try:
        result = subprocess.run(command, capture_output=True, text=True, errors="replace")
    except OSError as e:
        logger.warning(f"Could not run {' '.join(command)}: {e}", category="toolchain")
        return DetectionResult(False, PYTHON_MISSING)

    if result.returncode != 0:
        logger.warning(f"{' '.join(command)} exited with {result.returncode}", category="toolchain")
        return DetectionResult(False, PYTHON_MISSING)

    packages = [line for line in result.stdout.split('\n') if 'robotpy' in line]
    if not packages:
        logger.warning("No robotpy package in pip listing", category="toolchain")
        return DetectionResult(False, ROBOTPY_MISSING)

    logger.success(f"RobotPy detected: {packages[0].strip()}", category="toolchain")
    return DetectionResult(True)


def run_robot_command(subcommand: str, cwd: str, companion_file: str = "robot.py",
                      platform: Optional[str] = None) -> str:
    """
    Run ``<launcher> robot.py <subcommand>`` inside ``cwd``.

    Args:
        subcommand: DEPLOY or SIM
        cwd: Directory holding the companion file and the generated code
        companion_file: Name of the companion file
        platform: Platform override (defaults to sys.platform)

    Returns:
        The process error stream; empty when the run succeeded

    Raises:
        ValueError: unknown subcommand
        OSError: the launcher could not be started
    """
    if subcommand not in SUBCOMMANDS:
        raise ValueError(f"Unknown robot subcommand: {subcommand}")

    command = robot_command(subcommand, companion_file, platform)
    logger.log_command(command, cwd=cwd, category="toolchain")
    result = subprocess.run(command, cwd=cwd, capture_output=True, text=True, errors="replace")

    if result.stdout:
        logger.info(result.stdout.rstrip(), category="toolchain")
    if result.stderr:
        logger.error(result.stderr.rstrip(), category="toolchain")
    return result.stderr
