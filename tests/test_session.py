"""Session state, settings loading and workspace editing."""
import json
import os

from editor.blocks import RobotInitBlock, RobotPeriodicBlock, SetPwmBlock, LogicNegateBlock, LogicBooleanBlock
from editor.session import ProjectState, Session
from editor.settings import DEFAULT_SETTINGS, load_settings
from editor.toolbox import TOOLBOX, find_category
from editor.workspace import Workspace


# ── Session ──────────────────────────────────────────────────────────────────

def test_session_starts_without_project():
    session = Session()
    assert session.state == ProjectState.NO_PROJECT
    assert session.project_file is None
    assert session.output_dir is None
    assert session.toolchain_detected is False
    assert session.workspace.is_empty()


def test_open_project_sets_paths(tmp_path):
    session = Session()
    workspace = Workspace()
    workspace.add_stack(RobotInitBlock())
    path = str(tmp_path / "blockly.json")

    session.open_project(path, workspace)
    assert session.state == ProjectState.PROJECT_OPEN
    assert session.workspace is workspace
    assert session.project_dir == str(tmp_path)
    assert session.output_dir == os.path.join(str(tmp_path), "python")


def test_observers_notified_on_state_change(tmp_path):
    session = Session()
    changes = []
    session.add_observer(lambda old, new: changes.append((old, new)))

    session.open_project(str(tmp_path / "blockly.json"))
    session.set_project_file(str(tmp_path / "other.json"))
    assert changes == [
        (ProjectState.NO_PROJECT, ProjectState.PROJECT_OPEN),
        (ProjectState.PROJECT_OPEN, ProjectState.PROJECT_OPEN),
    ]


def test_failing_observer_does_not_break_session(tmp_path):
    session = Session()

    def broken(old, new):
        raise RuntimeError("observer failure")

    session.add_observer(broken)
    session.open_project(str(tmp_path / "blockly.json"))
    assert session.is_open


# ── Settings ─────────────────────────────────────────────────────────────────

def test_missing_settings_file_uses_defaults(tmp_path):
    assert load_settings(str(tmp_path / "nope.json")) == DEFAULT_SETTINGS


def test_partial_settings_are_merged(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"generator": {"indent": "    "}}), encoding="utf-8")

    settings = load_settings(str(path))
    assert settings["generator"]["indent"] == "    "
    assert settings["project"]["project_file_name"] == "blockly.json"


def test_invalid_settings_file_uses_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2", encoding="utf-8")
    assert load_settings(str(path)) == DEFAULT_SETTINGS


# ── Workspace editing ────────────────────────────────────────────────────────

def test_add_stack_places_below_existing():
    workspace = Workspace()
    first = workspace.add_stack(RobotInitBlock(), x=10, y=100)
    second = workspace.add_stack(RobotPeriodicBlock())
    assert first.y == 100
    assert second.y == 140


def test_locate_and_remove_nested_block():
    workspace = Workspace()
    motor = SetPwmBlock(pwm_id=1, value=0.5)
    init = RobotInitBlock(do=[motor])
    workspace.add_stack(init)

    location = workspace.locate(motor)
    assert location.parent is init
    assert location.slot == "DO"
    assert location.index == 0

    assert workspace.remove(motor) is True
    assert init.do == []
    assert workspace.locate(motor) is None


def test_remove_value_block_empties_slot():
    workspace = Workspace()
    operand = LogicBooleanBlock()
    negate = LogicNegateBlock(operand=operand)
    workspace.add_stack(negate)

    assert workspace.locate(operand).is_value_slot
    workspace.remove(operand)
    assert negate.operand is None


def test_remove_top_level_block_drops_stack():
    workspace = Workspace()
    init = RobotInitBlock()
    workspace.add_stack(init)
    workspace.remove(init)
    assert workspace.stacks == []


def test_identical_blocks_are_told_apart():
    workspace = Workspace()
    first, second = SetPwmBlock(), SetPwmBlock()
    init = RobotInitBlock(do=[first, second])
    workspace.add_stack(init)

    workspace.remove(second)
    assert len(init.do) == 1
    assert init.do[0] is first


def test_move_within_statement_slot():
    workspace = Workspace()
    a, b = SetPwmBlock(pwm_id=1), SetPwmBlock(pwm_id=2)
    init = RobotInitBlock(do=[a, b])
    workspace.add_stack(init)

    assert workspace.move(b, -1) is True
    assert init.do[0] is b
    assert workspace.move(b, -1) is False


def test_move_top_level_stack_swaps_positions():
    workspace = Workspace()
    init = RobotInitBlock()
    periodic = RobotPeriodicBlock()
    workspace.add_stack(init, y=0)
    workspace.add_stack(periodic, y=50)

    assert workspace.move(periodic, -1) is True
    assert [stack.blocks[0] for stack in workspace.ordered_stacks()] == [periodic, init]


def test_insert_into_slots():
    workspace = Workspace()
    init = RobotInitBlock()
    negate = LogicNegateBlock()
    workspace.add_stack(init)
    workspace.insert(init, "DO", SetPwmBlock(pwm_id=2))
    workspace.insert(init, "DO", SetPwmBlock(pwm_id=1), index=0)
    workspace.insert(negate, "BOOL", LogicBooleanBlock())

    assert [block.pwm_id for block in init.do] == [1, 2]
    assert negate.operand is not None


# ── Toolbox ──────────────────────────────────────────────────────────────────

def test_toolbox_categories():
    assert [category.name for category in TOOLBOX] == [
        "Events", "Logic", "Math", "Motors", "Sensors", "Controllers", "Commands",
    ]
    assert find_category("Math").entries == []
    assert find_category("Commands").entries == []


def test_toolbox_entries_create_blocks():
    logic = find_category("Logic")
    compare = logic.entries[1].create()
    assert compare.block_type == "logic_compare"
    assert compare.op == "EQ"
    assert [entry.block_type for entry in find_category("Motors").entries] == ["init_pwm_motor", "set_pwm"]
