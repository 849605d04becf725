#!/usr/bin/env python3

"""
Project Operations
==================

Open, create and save project documents, generate the robot code and run
the RobotPy toolchain on it. Every operation works on the explicit Session
and reports problems through the Dialogs interface; no error propagates out
of an operation.
"""

import os
import shutil
from typing import Optional

from editor.dialogs import Dialogs
from editor.generator import CodeGenerator
from editor.logger import get_logger
from editor.serializer import SerializationError, WorkspaceSerializer
from editor.session import Session
from editor.settings import load_settings
from toolchain.robotpy import DEPLOY, SIM, DetectionResult, detect_robotpy, run_robot_command

logger = get_logger()

TEMPLATE_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates', 'robot.py')

RUN_LABELS = {
    DEPLOY: "Deploy",
    SIM: "Simulation",
}


class ProjectManager:
    """Host operations of the editor"""

    def __init__(self, session: Session, dialogs: Dialogs, settings: Optional[dict] = None,
                 template_path: Optional[str] = None, serializer: Optional[WorkspaceSerializer] = None):
        settings = settings or load_settings()
        project_settings = settings.get("project", {})

        self.session = session
        self.dialogs = dialogs
        self.template_path = template_path or TEMPLATE_PATH
        self.serializer = serializer or WorkspaceSerializer()
        self.generator = CodeGenerator(settings.get("generator", {}).get("indent", "  "))

        self.project_file_name = project_settings.get("project_file_name", "blockly.json")
        self.project_extension = project_settings.get("project_extension", ".json")
        self.generated_file_name = project_settings.get("generated_file_name", "generated.py")
        self.companion_file_name = project_settings.get("companion_file_name", "robot.py")

    def _error(self, title: str, message: str):
        logger.error(f"{title}: {message}", category="project")
        self.dialogs.show_error(title, message)

    # ── Project file ─────────────────────────────────────────────────────────

    def open_project(self) -> bool:
        """Ask for a project file and load it into the session"""
        file_path = self.dialogs.ask_open_file()
        if not file_path:
            self._error("Error", "No file selected.")
            return False

        if not file_path.lower().endswith(self.project_extension):
            self._error("Error", "File selected is not a JSON file.")
            return False

        try:
            workspace = self.serializer.load_workspace(file_path)
        except (OSError, SerializationError) as e:
            self._error("Open Error", str(e))
            return False

        self.session.open_project(file_path, workspace)
        logger.log_action("Opened project", file_path, category="project")
        return True

    def create_project(self) -> bool:
        """Start an empty project in a chosen directory; nothing is written yet"""
        directory = self.dialogs.ask_directory()
        if not directory:
            logger.debug("Create project cancelled", category="project")
            return False

        self.session.open_project(os.path.join(directory, self.project_file_name))
        logger.log_action("Created project", self.session.project_file, category="project")
        return True

    def save_project(self) -> bool:
        """
        Write the workspace to the project file.

        Without a tracked project file the user picks a directory first;
        cancelling writes nothing.
        """
        file_path = self.session.project_file
        if not file_path:
            directory = self.dialogs.ask_directory()
            if not directory:
                logger.debug("Save cancelled", category="project")
                return False
            file_path = os.path.join(directory, self.project_file_name)

        try:
            size = self.serializer.save_workspace(self.session.workspace, file_path)
        except OSError as e:
            self._error("Save Error", str(e))
            return False

        logger.log_file_write(file_path, size, category="project")
        if file_path != self.session.project_file:
            self.session.set_project_file(file_path)
        return True

    def close(self) -> bool:
        """Save an open project before the window goes away"""
        if not self.session.is_open:
            return True
        return self.save_project()

    # ── Generated code ───────────────────────────────────────────────────────

    def generate_code(self) -> str:
        return self.generator.generate(self.session.workspace)

    def write_output(self, code: str) -> str:
        """
        Write the generated document and the companion file.

        Returns:
            The output directory

        Raises:
            OSError: the directory or one of the files cannot be written
        """
        output_dir = self.session.output_dir
        os.makedirs(output_dir, exist_ok=True)

        generated_path = os.path.join(output_dir, self.generated_file_name)
        with open(generated_path, 'w', encoding='utf-8') as f:
            f.write(code)
        logger.log_file_write(generated_path, len(code), category="project")

        companion_path = os.path.join(output_dir, self.companion_file_name)
        shutil.copyfile(self.template_path, companion_path)
        logger.debug(f"Copied {self.template_path} to {companion_path}", category="project")
        return output_dir

    def run_robot(self, subcommand: str) -> bool:
        """
        Generate, write and hand the code to the toolchain.

        Args:
            subcommand: DEPLOY or SIM

        Returns:
            True when the toolchain reported no errors
        """
        label = RUN_LABELS[subcommand]

        if not self.session.is_open:
            self._error(f"{label} Unavailable", "Project directory not open.")
            return False
        if not self.session.toolchain_detected:
            self._error(f"{label} Unavailable", "RobotPy install not detected.")
            return False

        logger.log_action(f"{label} requested", self.session.project_file, category="project")
        try:
            output_dir = self.write_output(self.generate_code())
            errors = run_robot_command(subcommand, output_dir, self.companion_file_name)
        except OSError as e:
            self._error(f"{label} Error", str(e))
            return False

        if errors:
            self._error(f"{label} Error", errors)
            return False

        logger.success(f"{label} finished", category="project")
        return True

    def deploy(self) -> bool:
        return self.run_robot(DEPLOY)

    def simulate(self) -> bool:
        return self.run_robot(SIM)

    # ── Toolchain ────────────────────────────────────────────────────────────

    def detect_toolchain(self) -> DetectionResult:
        """Check for RobotPy and warn the user when it is missing"""
        result = detect_robotpy()
        self.session.set_toolchain_detected(result.installed)
        if result.warning:
            self.dialogs.show_warning(result.warning)
        return result
