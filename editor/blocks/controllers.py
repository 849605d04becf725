"""
Controller blocks: joystick axes and buttons.

None of these produce working code yet; each renders a fixed placeholder so
the generated document still shows where the block was used.
"""
from typing import List, Literal, Union

from pydantic import Field

from editor.fragments import Expression, Order
from .base import BaseBlock, BlockKind, NumberField


class GetRawAxisBlock(BaseBlock):
    block_type: Literal["get_raw_axis"] = "get_raw_axis"
    LABEL = "Get value of joystick"
    KIND = BlockKind.VALUE
    FIELDS = (
        NumberField(name="PORT", label="Joystick", default=0, minimum=0, maximum=10, precision=1),
        NumberField(name="AXIS", label="Axis", default=1, minimum=1, maximum=10, precision=1),
    )

    port: Union[int, float] = Field(0, alias="PORT")
    axis: Union[int, float] = Field(1, alias="AXIS")

    def render(self, gen):
        return Expression("RAW_AXIS", Order.FUNCTION_CALL)


class ButtonBlock(BaseBlock):
    """Statement block guarded by a joystick button"""
    FIELDS = (
        NumberField(name="BTN", label="Button", default=0, minimum=0, maximum=20, precision=1),
        NumberField(name="PORT", label="Joystick", default=0, minimum=0, maximum=10, precision=1),
    )
    STATEMENT_SLOTS = ("DO",)

    button: Union[int, float] = Field(0, alias="BTN")
    port: Union[int, float] = Field(0, alias="PORT")
    do: List["BlockUnion"] = Field(default_factory=list, alias="DO")


class WhileButtonHeldBlock(ButtonBlock):
    block_type: Literal["while_btn_held"] = "while_btn_held"
    LABEL = "While button held"

    def render(self, gen):
        return ["BTN_HOLD"]


class WhenButtonPressedBlock(ButtonBlock):
    block_type: Literal["when_btn_pressed"] = "when_btn_pressed"
    LABEL = "When button pressed"

    def render(self, gen):
        return ["BTN_PRESS"]
