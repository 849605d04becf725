"""Sensor blocks: gyro setup and readings."""
from typing import Literal

from pydantic import Field

from editor.fragments import Expression, Order
from editor.logger import get_logger
from .base import BaseBlock, BlockKind, DropdownField

logger = get_logger()


class InitGyroBlock(BaseBlock):
    """Declares a gyro. No gyro class is wired up yet, so the attribute is always ``None``."""
    block_type: Literal["init_gyro"] = "init_gyro"
    LABEL = "Init gyro of type"
    FIELDS = (
        DropdownField(name="TYPE", label="Type", options=(("NavX", "NAVX"),)),
    )

    gyro_type: str = Field("NAVX", alias="TYPE")

    def render(self, gen):
        logger.debug(f"Gyro type {self.gyro_type!r} unimplemented", category="blocks")
        return [f"self.gyro_{str(self.gyro_type).lower()} = None"]


class GetGyroAngleBlock(BaseBlock):
    # The gyro dropdown is display-only and never stored in the document
    block_type: Literal["get_gyro_angle"] = "get_gyro_angle"
    LABEL = "Gyro angle from NavX"
    KIND = BlockKind.VALUE

    def render(self, gen):
        return Expression("self.gyro_navx.get()", Order.FUNCTION_CALL)
