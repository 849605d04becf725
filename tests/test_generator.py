"""Code generator driver: stack order, printing, imports and disabled blocks."""
from editor.blocks import (
    RobotInitBlock, RobotPeriodicBlock, InitPwmMotorBlock, SetPwmBlock, InitGyroBlock,
    GetGyroAngleBlock, ControlsIfBlock, LogicBooleanBlock, LogicCompareBlock, WhileButtonHeldBlock,
)
from editor.fragments import Indented
from editor.generator import CodeGenerator, generate_code
from editor.printer import CodePrinter
from editor.workspace import BlockStack, Workspace


def workspace_of(*stacks):
    return Workspace(stacks=[BlockStack(x=x, y=y, blocks=blocks) for x, y, blocks in stacks])


# ── Printer ──────────────────────────────────────────────────────────────────

def test_printer_indents_nested_groups():
    printer = CodePrinter("  ")
    printer.write(["a:", Indented(["b:", Indented(["c"]), "d"]), "e"])
    assert printer.getvalue() == "a:\n  b:\n    c\n  d\ne\n"


def test_printer_single_trailing_newline():
    printer = CodePrinter()
    printer.line("x")
    printer.blank_line()
    printer.blank_line()
    assert printer.getvalue() == "x\n"


def test_printer_empty_document():
    assert CodePrinter().getvalue() == ""


# ── Driver ───────────────────────────────────────────────────────────────────

def test_robot_init_with_set_pwm():
    workspace = workspace_of((20, 20, [RobotInitBlock(do=[SetPwmBlock(pwm_id=1, value=0.5)])]))
    code = CodeGenerator().generate(workspace)
    lines = code.splitlines()
    assert lines[0] == "def robotInit(self):"
    assert "0.5" in lines[2]
    assert code == "def robotInit(self):\n  # autogenerated code\n  self.motor_pwm_1.set(0.5)\n"


def test_empty_workspace_generates_nothing():
    assert CodeGenerator().generate(Workspace()) == ""


def test_stacks_in_display_order_separated_by_blank_line():
    workspace = workspace_of(
        (0, 200, [RobotInitBlock()]),
        (0, 10, [RobotPeriodicBlock()]),
    )
    assert CodeGenerator().generate(workspace) == (
        "def robotPeriodic(self):\n"
        "  # autogenerated code\n"
        "\n"
        "def robotInit(self):\n"
        "  # autogenerated code\n"
    )


def test_same_row_orders_by_x():
    workspace = workspace_of(
        (300, 10, [RobotInitBlock()]),
        (10, 10, [RobotPeriodicBlock()]),
    )
    code = CodeGenerator().generate(workspace)
    assert code.index("robotPeriodic") < code.index("robotInit")


def test_same_position_keeps_document_order():
    workspace = workspace_of(
        (0, 0, [RobotInitBlock()]),
        (0, 0, [RobotPeriodicBlock()]),
    )
    code = CodeGenerator().generate(workspace)
    assert code.index("robotInit") < code.index("robotPeriodic")


def test_statements_keep_slot_order():
    body = [SetPwmBlock(pwm_id=n, value=0) for n in (3, 1, 2)]
    code = CodeGenerator().generate(workspace_of((0, 0, [RobotPeriodicBlock(do=body)])))
    assert [line.strip() for line in code.splitlines()[2:]] == [
        "self.motor_pwm_3.set(0)",
        "self.motor_pwm_1.set(0)",
        "self.motor_pwm_2.set(0)",
    ]


def test_nested_statement_slots_indent_per_level():
    condition = LogicCompareBlock(op="LT", a=GetGyroAngleBlock())
    branch = ControlsIfBlock()
    branch.set_slot("IF0", condition)
    branch.set_slot("DO0", [SetPwmBlock(pwm_id=2, value=-0.25)])
    code = CodeGenerator().generate(workspace_of((0, 0, [RobotPeriodicBlock(do=[branch])])))
    assert code == (
        "def robotPeriodic(self):\n"
        "  # autogenerated code\n"
        "  if self.gyro_navx.get() < 0:\n"
        "    self.motor_pwm_2.set(-0.25)\n"
    )


def test_naked_value_block_is_emitted_as_line():
    workspace = workspace_of((0, 0, [GetGyroAngleBlock()]))
    assert CodeGenerator().generate(workspace) == "self.gyro_navx.get()\n"


def test_placeholder_statement_in_body():
    button = WhileButtonHeldBlock(do=[SetPwmBlock(pwm_id=1, value=1)])
    code = CodeGenerator().generate(workspace_of((0, 0, [RobotPeriodicBlock(do=[button])])))
    assert code.splitlines()[2] == "  BTN_HOLD"


def test_imports_header():
    workspace = workspace_of((0, 0, [RobotInitBlock(do=[InitPwmMotorBlock(pwm_port=1, motor_type="SPARK")])]))
    assert CodeGenerator().generate(workspace) == (
        "import wpilib\n"
        "\n"
        "\n"
        "def robotInit(self):\n"
        "  # autogenerated code\n"
        "  self.motor_pwm_1 = wpilib.Spark(1)\n"
    )


def test_no_imports_for_placeholders():
    workspace = workspace_of((0, 0, [RobotInitBlock(do=[InitGyroBlock(),
                                                        InitPwmMotorBlock(motor_type="OTHER")])]))
    assert not CodeGenerator().generate(workspace).startswith("import")


def test_disabled_blocks_are_skipped():
    disabled_motor = InitPwmMotorBlock(pwm_port=1, motor_type="SPARK", enabled=False)
    workspace = workspace_of(
        (0, 0, [RobotInitBlock(do=[disabled_motor, SetPwmBlock(pwm_id=1, value=0.5)])]),
        (0, 100, [RobotPeriodicBlock(enabled=False)]),
    )
    assert CodeGenerator().generate(workspace) == (
        "def robotInit(self):\n"
        "  # autogenerated code\n"
        "  self.motor_pwm_1.set(0.5)\n"
    )


def test_disabled_value_block_uses_slot_default():
    branch = ControlsIfBlock()
    branch.set_slot("IF0", LogicBooleanBlock(value="TRUE", enabled=False))
    code = CodeGenerator().generate(workspace_of((0, 0, [branch])))
    assert code == "if False:\n  pass\n"


def test_generate_code_uses_configured_indent():
    workspace = workspace_of((0, 0, [RobotInitBlock(do=[SetPwmBlock(pwm_id=1, value=0.5)])]))
    code = generate_code(workspace, {"generator": {"indent": "    "}})
    assert code.splitlines()[2] == "    self.motor_pwm_1.set(0.5)"
