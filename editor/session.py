#!/usr/bin/env python3

"""
Editor Session
==============

In-memory record of the editing session: project state, project file path,
the workspace being edited and whether the robot toolchain was found.
One Session is created at start-up and handed to every host operation.
Observers are notified on project state changes.
"""

import os
from enum import Enum
from typing import Callable, List, Optional

from editor.logger import get_logger
from editor.workspace import Workspace

logger = get_logger()


class ProjectState(Enum):
    """Project lifecycle states (there is no closed state)"""
    NO_PROJECT = "no_project"
    PROJECT_OPEN = "project_open"


class Session:
    """Explicit session context passed to the project operations"""

    def __init__(self, output_dir_name: str = "python"):
        self._state = ProjectState.NO_PROJECT
        self._project_file: Optional[str] = None
        self.workspace = Workspace()
        self.toolchain_detected = False
        self.output_dir_name = output_dir_name
        self._observers: List[Callable[[ProjectState, ProjectState], None]] = []

    @property
    def state(self) -> ProjectState:
        return self._state

    @property
    def project_file(self) -> Optional[str]:
        return self._project_file

    @property
    def is_open(self) -> bool:
        return self._state == ProjectState.PROJECT_OPEN

    @property
    def project_dir(self) -> Optional[str]:
        if not self._project_file:
            return None
        return os.path.dirname(self._project_file)

    @property
    def output_dir(self) -> Optional[str]:
        """Directory receiving the generated code and the companion file"""
        if not self._project_file:
            return None
        return os.path.join(self.project_dir, self.output_dir_name)

    def open_project(self, project_file: str, workspace: Optional[Workspace] = None):
        """
        Switch to PROJECT_OPEN on ``project_file``.

        Args:
            project_file: Path of the project document
            workspace: Loaded workspace (a fresh empty one when omitted)
        """
        self.workspace = workspace if workspace is not None else Workspace()
        self.set_project_file(project_file)

    def set_project_file(self, project_file: str):
        """Track a new project path; the workspace is kept"""
        old_state = self._state
        self._project_file = project_file
        self._state = ProjectState.PROJECT_OPEN
        logger.log_state_change("Project", old_state.value, self._state.value, category="project")
        logger.info(f"Project file: {project_file}", category="project")

        for observer in list(self._observers):
            try:
                observer(old_state, self._state)
            except Exception as e:
                logger.error(f"Observer error: {e}", category="project")

    def set_toolchain_detected(self, detected: bool):
        self.toolchain_detected = detected
        logger.debug(f"Toolchain detected: {detected}", category="toolchain")

    def add_observer(self, callback: Callable[[ProjectState, ProjectState], None]):
        """
        Add observer callback for project state changes.

        Args:
            callback: Function(old_state, new_state)
        """
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[ProjectState, ProjectState], None]):
        if callback in self._observers:
            self._observers.remove(callback)
