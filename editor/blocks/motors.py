"""Motor blocks: motor controller construction and output."""
from typing import ClassVar, Dict, Literal, Tuple, Union

from pydantic import Field

from editor.logger import get_logger
from .base import BaseBlock, DropdownField, NumberField, format_number

logger = get_logger()


class InitCanMotorBlock(BaseBlock):
    """
    Declares a CAN motor controller.

    No CAN controller class is wired up yet: every type renders ``None``.
    """
    block_type: Literal["init_can_motor"] = "init_can_motor"
    LABEL = "Init motor on CAN"
    FIELDS = (
        NumberField(name="CAN_ID", label="CAN ID", default=1, minimum=1, maximum=30, precision=1),
        DropdownField(name="TYPE", label="Type", options=(
            ("Spark Max", "SPARK"),
            ("Falcon 500", "FALCON"),
            ("Talon SRX", "TALON"),
            ("Victor SPX", "VICTOR"),
        )),
    )

    can_id: Union[int, float] = Field(1, alias="CAN_ID")
    motor_type: str = Field("SPARK", alias="TYPE")

    def render(self, gen):
        return [f"self.motor_can_{format_number(self.can_id)} = None"]


class InitPwmMotorBlock(BaseBlock):
    """Declares a PWM motor controller on ``PWM_PORT``."""
    block_type: Literal["init_pwm_motor"] = "init_pwm_motor"
    LABEL = "Init motor on PWM"
    FIELDS = (
        NumberField(name="PWM_PORT", label="PWM port", default=1, minimum=1, maximum=30, precision=1),
        DropdownField(name="TYPE", label="Type", options=(
            ("Spark", "SPARK"),
            ("Talon SRX", "TALON"),
            ("Jaguar", "JAGUAR"),
        )),
    )

    CONTROLLERS: ClassVar[Dict[str, str]] = {
        "SPARK": "wpilib.Spark",
        "TALON": "wpilib.Talon",
        "JAGUAR": "wpilib.Jaguar",
    }

    pwm_port: Union[int, float] = Field(1, alias="PWM_PORT")
    motor_type: str = Field("SPARK", alias="TYPE")

    def imports(self) -> Tuple[str, ...]:
        if self.motor_type in self.CONTROLLERS:
            return ("wpilib",)
        return ()

    def render(self, gen):
        port = format_number(self.pwm_port)
        controller = self.CONTROLLERS.get(self.motor_type)
        if controller is None:
            logger.debug(f"PWM motor type {self.motor_type!r} unimplemented", category="blocks")
            return [f"self.motor_pwm_{port} = None"]
        return [f"self.motor_pwm_{port} = {controller}({port})"]


class SetPwmBlock(BaseBlock):
    """Sets the output of PWM motor ``ID`` to ``VALUE`` (-1..1)."""
    block_type: Literal["set_pwm"] = "set_pwm"
    LABEL = "Set PWM"
    FIELDS = (
        NumberField(name="ID", label="PWM port", default=1, minimum=1, maximum=30, precision=1),
        NumberField(name="VALUE", label="Value", default=0, minimum=-1, maximum=1, precision=0.01),
    )

    pwm_id: Union[int, float] = Field(1, alias="ID")
    value: Union[int, float] = Field(0, alias="VALUE")

    def render(self, gen):
        return [f"self.motor_pwm_{format_number(self.pwm_id)}.set({format_number(self.value)})"]
