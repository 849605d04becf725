"""Event blocks: robot lifecycle hooks that own the rest of the program."""
from typing import ClassVar, List, Literal

from pydantic import Field

from editor.fragments import Indented
from .base import BaseBlock, BlockKind


class EventBlock(BaseBlock):
    """Top-level block rendering a robot method with its statement slot as body"""
    KIND = BlockKind.EVENT
    STATEMENT_SLOTS = ("DO",)
    METHOD_NAME: ClassVar[str] = ""

    do: List["BlockUnion"] = Field(default_factory=list, alias="DO")

    def render(self, gen):
        return [
            f"def {self.METHOD_NAME}(self):",
            Indented(["# autogenerated code"] + gen.statements(self.do)),
        ]


class RobotInitBlock(EventBlock):
    block_type: Literal["robot_init"] = "robot_init"
    LABEL = "Robot Init"
    METHOD_NAME = "robotInit"


class RobotPeriodicBlock(EventBlock):
    block_type: Literal["robot_periodic"] = "robot_periodic"
    LABEL = "Robot Periodic"
    METHOD_NAME = "robotPeriodic"
