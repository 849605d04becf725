"""
Toolbox: the block palette shown in the editor, grouped by category.

Math and Commands have no blocks yet and show up empty.
"""
from typing import Any, Dict, List, Optional

from editor.blocks import BLOCK_TYPES, BaseBlock, create_block


class ToolboxEntry:
    """One block template of a category; ``fields`` override the defaults"""

    def __init__(self, block_type: str, fields: Optional[Dict[str, Any]] = None):
        if block_type not in BLOCK_TYPES:
            raise KeyError(f"Unknown block type in toolbox: {block_type}")
        self.block_type = block_type
        self.fields = fields or {}

    @property
    def label(self) -> str:
        return BLOCK_TYPES[self.block_type].LABEL or self.block_type

    def create(self) -> BaseBlock:
        return create_block(self.block_type, **self.fields)


class ToolboxCategory:
    def __init__(self, name: str, entries: List[ToolboxEntry]):
        self.name = name
        self.entries = entries


TOOLBOX: List[ToolboxCategory] = [
    ToolboxCategory("Events", [
        ToolboxEntry("robot_init"),
        ToolboxEntry("robot_periodic"),
    ]),
    ToolboxCategory("Logic", [
        ToolboxEntry("controls_if"),
        ToolboxEntry("logic_compare", {"OP": "EQ"}),
        ToolboxEntry("logic_operation", {"OP": "AND"}),
        ToolboxEntry("logic_negate"),
        ToolboxEntry("logic_boolean", {"BOOL": "TRUE"}),
        ToolboxEntry("logic_ternary"),
    ]),
    ToolboxCategory("Math", []),
    ToolboxCategory("Motors", [
        ToolboxEntry("init_pwm_motor"),
        ToolboxEntry("set_pwm"),
    ]),
    ToolboxCategory("Sensors", [
        ToolboxEntry("init_gyro"),
        ToolboxEntry("get_gyro_angle"),
    ]),
    ToolboxCategory("Controllers", [
        ToolboxEntry("get_raw_axis"),
        ToolboxEntry("while_btn_held"),
        ToolboxEntry("when_btn_pressed"),
    ]),
    ToolboxCategory("Commands", []),
]


def find_category(name: str) -> Optional[ToolboxCategory]:
    for category in TOOLBOX:
        if category.name == name:
            return category
    return None
