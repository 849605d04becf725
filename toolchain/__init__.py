#!/usr/bin/env python3

"""
Robot Toolchain Package
=======================

This package wraps the external RobotPy toolchain:
- launcher: platform-specific Python 3 launcher command
- robotpy: install detection and the deploy/sim subcommands
"""

__version__ = "1.0.0"
