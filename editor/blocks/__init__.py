"""
Block registry: public exports + BlockUnion discriminated on block_type.
"""
from typing import Annotated, Dict, Type, Union, get_args

from pydantic import Field

from .base import (
    BaseBlock, BlockKind, SlotKind, FieldSpec, NumberField, DropdownField,
    FieldValueError, format_number, new_block_id,
)
from .events import EventBlock, RobotInitBlock, RobotPeriodicBlock
from .motors import InitCanMotorBlock, InitPwmMotorBlock, SetPwmBlock
from .sensors import InitGyroBlock, GetGyroAngleBlock
from .controllers import ButtonBlock, GetRawAxisBlock, WhileButtonHeldBlock, WhenButtonPressedBlock
from .logic import (
    IfBranch, ControlsIfBlock, LogicCompareBlock, LogicOperationBlock,
    LogicNegateBlock, LogicBooleanBlock, LogicTernaryBlock,
)

BlockUnion = Annotated[
    Union[
        RobotInitBlock,
        RobotPeriodicBlock,
        InitCanMotorBlock,
        InitPwmMotorBlock,
        SetPwmBlock,
        InitGyroBlock,
        GetGyroAngleBlock,
        GetRawAxisBlock,
        WhileButtonHeldBlock,
        WhenButtonPressedBlock,
        ControlsIfBlock,
        LogicCompareBlock,
        LogicOperationBlock,
        LogicNegateBlock,
        LogicBooleanBlock,
        LogicTernaryBlock,
    ],
    Field(discriminator="block_type"),
]

_BLOCK_CLASSES = get_args(get_args(BlockUnion)[0])

# Slots refer to BlockUnion by name; resolve them now that it exists
for _model in (EventBlock, ButtonBlock, IfBranch, *_BLOCK_CLASSES):
    _model.model_rebuild(force=True)

BLOCK_TYPES: Dict[str, Type[BaseBlock]] = {
    cls.model_fields["block_type"].default: cls for cls in _BLOCK_CLASSES
}


def create_block(block_type: str, **values) -> BaseBlock:
    """
    Create a block for the editor with a fresh id and default field values.

    Raises:
        KeyError: unknown block type
    """
    cls = BLOCK_TYPES[block_type]
    data = cls.default_fields()
    data.update(values)
    return cls(id=new_block_id(), **data)


__all__ = [
    # Base
    "BaseBlock", "BlockKind", "SlotKind", "FieldSpec", "NumberField", "DropdownField",
    "FieldValueError", "format_number", "new_block_id",
    # Events
    "EventBlock", "RobotInitBlock", "RobotPeriodicBlock",
    # Motors
    "InitCanMotorBlock", "InitPwmMotorBlock", "SetPwmBlock",
    # Sensors
    "InitGyroBlock", "GetGyroAngleBlock",
    # Controllers
    "ButtonBlock", "GetRawAxisBlock", "WhileButtonHeldBlock", "WhenButtonPressedBlock",
    # Logic
    "IfBranch", "ControlsIfBlock", "LogicCompareBlock", "LogicOperationBlock",
    "LogicNegateBlock", "LogicBooleanBlock", "LogicTernaryBlock",
    # Registry
    "BlockUnion", "BLOCK_TYPES", "create_block",
]
