"""Project operations: open, create, save, deploy/sim and toolchain detection."""
import copy
import json
import sys

import pytest

import editor.project as project_module
from editor.blocks import RobotInitBlock, SetPwmBlock
from editor.project import TEMPLATE_PATH, ProjectManager
from editor.serializer import WorkspaceSerializer
from editor.session import ProjectState, Session
from editor.settings import DEFAULT_SETTINGS
from toolchain import robotpy
from toolchain.robotpy import DEPLOY, SIM, ROBOTPY_MISSING, DetectionResult


class FakeDialogs:
    """Records every dialog; answers prompts with canned values"""

    def __init__(self, open_file=None, directory=None):
        self.open_file = open_file
        self.directory = directory
        self.prompts = []
        self.errors = []
        self.warnings = []

    def ask_open_file(self):
        self.prompts.append("file")
        return self.open_file

    def ask_directory(self):
        self.prompts.append("directory")
        return self.directory

    def show_error(self, title, message):
        self.errors.append((title, message))

    def show_warning(self, message):
        self.warnings.append(message)


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def dialogs():
    return FakeDialogs()


@pytest.fixture
def manager(session, dialogs):
    return ProjectManager(session, dialogs, copy.deepcopy(DEFAULT_SETTINGS))


@pytest.fixture
def runs(monkeypatch):
    """Replace the toolchain call; collects (subcommand, cwd, companion) tuples"""
    calls = []

    def fake_run(subcommand, cwd, companion_file="robot.py", platform=None):
        calls.append((subcommand, cwd, companion_file))
        return ""

    monkeypatch.setattr(project_module, "run_robot_command", fake_run)
    return calls


def write_project(path):
    serializer = WorkspaceSerializer()
    session = Session()
    session.workspace.add_stack(RobotInitBlock(do=[SetPwmBlock(pwm_id=1, value=0.5)]), x=20, y=20)
    serializer.save_workspace(session.workspace, str(path))


def open_session(session, tmp_path, detected=True):
    session.open_project(str(tmp_path / "blockly.json"))
    session.workspace.add_stack(RobotInitBlock(do=[SetPwmBlock(pwm_id=1, value=0.5)]))
    session.set_toolchain_detected(detected)


# ── Open ─────────────────────────────────────────────────────────────────────

def test_open_cancelled(manager, session, dialogs):
    assert manager.open_project() is False
    assert dialogs.errors == [("Error", "No file selected.")]
    assert session.state == ProjectState.NO_PROJECT


def test_open_non_json_file_changes_nothing(manager, session, dialogs, tmp_path, monkeypatch):
    path = tmp_path / "robot.txt"
    path.write_text("{}", encoding="utf-8")
    dialogs.open_file = str(path)

    def fail(*args, **kwargs):
        raise AssertionError("serializer must not be called")

    monkeypatch.setattr(manager.serializer, "load_workspace", fail)

    assert manager.open_project() is False
    assert dialogs.errors == [("Error", "File selected is not a JSON file.")]
    assert session.state == ProjectState.NO_PROJECT
    assert session.project_file is None


def test_open_unreadable_json(manager, session, dialogs, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{broken", encoding="utf-8")
    dialogs.open_file = str(path)

    assert manager.open_project() is False
    assert dialogs.errors[0][0] == "Open Error"
    assert session.state == ProjectState.NO_PROJECT


def malformed(stack_record):
    return json.dumps({"blocks": {"languageVersion": 0, "blocks": [stack_record]}}).encode("utf-8")


@pytest.mark.parametrize("content", [
    malformed({"type": "controls_if", "extraState": {"elseIfCount": "two"}}),
    malformed({"type": "controls_if", "extraState": "x"}),
    malformed({"type": "robot_init", "x": "left", "y": 0}),
    malformed({"type": "robot_init", "inputs": ["DO"]}),
    malformed({"type": "set_pwm", "fields": 5}),
    b'\xff\xfe{"blocks": {}}',
], ids=["else-if-count-text", "extra-state-text", "position-text", "inputs-list", "fields-number", "not-utf8"])
def test_open_malformed_document_reports_open_error(manager, session, dialogs, tmp_path, content):
    path = tmp_path / "blockly.json"
    path.write_bytes(content)
    dialogs.open_file = str(path)

    assert manager.open_project() is False
    assert len(dialogs.errors) == 1
    assert dialogs.errors[0][0] == "Open Error"
    assert session.state == ProjectState.NO_PROJECT
    assert session.project_file is None


def test_open_missing_file(manager, session, dialogs, tmp_path):
    dialogs.open_file = str(tmp_path / "gone.json")
    assert manager.open_project() is False
    assert dialogs.errors[0][0] == "Open Error"
    assert session.project_file is None


def test_open_project(manager, session, dialogs, tmp_path):
    path = tmp_path / "blockly.json"
    write_project(path)
    dialogs.open_file = str(path)

    assert manager.open_project() is True
    assert dialogs.errors == []
    assert session.state == ProjectState.PROJECT_OPEN
    assert session.project_file == str(path)
    assert session.workspace.stacks[0].blocks[0].do[0].value == 0.5


def test_open_accepts_uppercase_extension(manager, session, dialogs, tmp_path):
    path = tmp_path / "ROBOT.JSON"
    write_project(path)
    dialogs.open_file = str(path)
    assert manager.open_project() is True


# ── Create ───────────────────────────────────────────────────────────────────

def test_create_cancelled_is_silent(manager, session, dialogs):
    assert manager.create_project() is False
    assert dialogs.errors == []
    assert session.state == ProjectState.NO_PROJECT


def test_create_project_writes_nothing(manager, session, dialogs, tmp_path):
    dialogs.directory = str(tmp_path)
    session.workspace.add_stack(RobotInitBlock())

    assert manager.create_project() is True
    assert session.state == ProjectState.PROJECT_OPEN
    assert session.project_file == str(tmp_path / "blockly.json")
    assert session.workspace.is_empty()
    assert list(tmp_path.iterdir()) == []


# ── Save ─────────────────────────────────────────────────────────────────────

def test_save_without_project_prompts_and_cancel_writes_nothing(manager, session, dialogs, tmp_path):
    session.workspace.add_stack(RobotInitBlock())

    assert manager.save_project() is False
    assert dialogs.prompts == ["directory"]
    assert session.state == ProjectState.NO_PROJECT
    assert session.project_file is None
    assert list(tmp_path.iterdir()) == []


def test_save_without_project_uses_chosen_directory(manager, session, dialogs, tmp_path):
    dialogs.directory = str(tmp_path)
    session.workspace.add_stack(RobotInitBlock(), x=20, y=20)

    assert manager.save_project() is True
    path = tmp_path / "blockly.json"
    assert session.project_file == str(path)
    assert session.state == ProjectState.PROJECT_OPEN
    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["blocks"]["blocks"][0]["type"] == "robot_init"


def test_save_open_project_does_not_prompt(manager, session, dialogs, tmp_path):
    open_session(session, tmp_path)
    assert manager.save_project() is True
    assert dialogs.prompts == []
    assert (tmp_path / "blockly.json").exists()


def test_save_failure_keeps_tracked_path(manager, session, dialogs, tmp_path):
    target = str(tmp_path / "missing" / "blockly.json")
    session.open_project(target)

    assert manager.save_project() is False
    assert dialogs.errors[0][0] == "Save Error"
    assert session.project_file == target


def test_close_saves_open_project(manager, session, tmp_path):
    open_session(session, tmp_path)
    assert manager.close() is True
    assert (tmp_path / "blockly.json").exists()


def test_close_without_project_does_not_prompt(manager, dialogs):
    assert manager.close() is True
    assert dialogs.prompts == []


# ── Deploy / Simulate ────────────────────────────────────────────────────────

def test_deploy_without_project(manager, dialogs, runs, tmp_path):
    assert manager.deploy() is False
    assert dialogs.errors == [("Deploy Unavailable", "Project directory not open.")]
    assert runs == []


def test_simulate_without_robotpy_has_no_side_effects(manager, session, dialogs, runs, tmp_path):
    open_session(session, tmp_path, detected=False)

    assert manager.simulate() is False
    assert dialogs.errors == [("Simulation Unavailable", "RobotPy install not detected.")]
    assert not (tmp_path / "python").exists()
    assert runs == []


def test_deploy_writes_output_and_runs_toolchain(manager, session, dialogs, runs, tmp_path):
    open_session(session, tmp_path)

    assert manager.deploy() is True
    output_dir = tmp_path / "python"
    generated = (output_dir / "generated.py").read_text(encoding="utf-8")
    assert generated == "def robotInit(self):\n  # autogenerated code\n  self.motor_pwm_1.set(0.5)\n"
    with open(TEMPLATE_PATH, encoding="utf-8") as f:
        assert (output_dir / "robot.py").read_text(encoding="utf-8") == f.read()
    assert runs == [(DEPLOY, str(output_dir), "robot.py")]
    assert dialogs.errors == []


def test_simulate_runs_sim(manager, session, runs, tmp_path):
    open_session(session, tmp_path)
    assert manager.simulate() is True
    assert runs[0][0] == SIM


def test_rerun_overwrites_output(manager, session, runs, tmp_path):
    open_session(session, tmp_path)
    manager.deploy()
    session.workspace.stacks[0].blocks[0].do[0].value = -1
    manager.deploy()
    assert "set(-1)" in (tmp_path / "python" / "generated.py").read_text(encoding="utf-8")


def test_toolchain_error_stream_is_reported(manager, session, dialogs, tmp_path, monkeypatch):
    open_session(session, tmp_path)
    monkeypatch.setattr(project_module, "run_robot_command", lambda *args, **kwargs: "boom\n")

    assert manager.deploy() is False
    assert dialogs.errors == [("Deploy Error", "boom\n")]


def test_undecodable_error_stream_is_reported(manager, session, dialogs, tmp_path, monkeypatch):
    open_session(session, tmp_path)
    command = [sys.executable, "-c", "import sys; sys.stderr.buffer.write(b'\\xff\\xfe fail')"]
    monkeypatch.setattr(robotpy, "robot_command", lambda *args: command)

    assert manager.deploy() is False
    assert len(dialogs.errors) == 1
    title, message = dialogs.errors[0]
    assert title == "Deploy Error"
    assert message.endswith(" fail")


def test_launcher_missing_is_reported(manager, session, dialogs, tmp_path, monkeypatch):
    open_session(session, tmp_path)

    def missing(*args, **kwargs):
        raise FileNotFoundError("python3 not found")

    monkeypatch.setattr(project_module, "run_robot_command", missing)

    assert manager.simulate() is False
    assert dialogs.errors == [("Simulation Error", "python3 not found")]


def test_output_write_failure_is_reported(session, dialogs, runs, tmp_path):
    manager = ProjectManager(session, dialogs, copy.deepcopy(DEFAULT_SETTINGS),
                             template_path=str(tmp_path / "no_template.py"))
    open_session(session, tmp_path)

    assert manager.deploy() is False
    assert dialogs.errors[0][0] == "Deploy Error"
    assert runs == []


# ── Toolchain detection ──────────────────────────────────────────────────────

def test_detect_toolchain_warns_when_missing(manager, session, dialogs, monkeypatch):
    monkeypatch.setattr(project_module, "detect_robotpy", lambda: DetectionResult(False, ROBOTPY_MISSING))

    result = manager.detect_toolchain()
    assert result.installed is False
    assert dialogs.warnings == ["RobotPy install not detected."]
    assert session.toolchain_detected is False


def test_detect_toolchain_records_success(manager, session, dialogs, monkeypatch):
    monkeypatch.setattr(project_module, "detect_robotpy", lambda: DetectionResult(True))

    manager.detect_toolchain()
    assert dialogs.warnings == []
    assert session.toolchain_detected is True
