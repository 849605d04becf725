"""
Logic blocks: conditionals and boolean expressions.

Output follows the stock Python generator of the block library the editor's
documents come from, so projects created there generate the same code here.
"""
from typing import ClassVar, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field

from editor.fragments import Expression, Indented, Order
from .base import BaseBlock, BlockKind, DropdownField, SlotKind


class IfBranch(BaseModel):
    """One ``if``/``elif`` arm of a controls_if block"""
    condition: Optional["BlockUnion"] = None
    body: List["BlockUnion"] = Field(default_factory=list)


class ControlsIfBlock(BaseBlock):
    block_type: Literal["controls_if"] = "controls_if"
    LABEL = "if"

    branches: List[IfBranch] = Field(default_factory=lambda: [IfBranch()])
    # None when the block has no else arm
    else_body: Optional[List["BlockUnion"]] = None

    def slots(self) -> List[Tuple[str, str]]:
        result = []
        for n in range(len(self.branches)):
            result.append((f"IF{n}", SlotKind.VALUE))
            result.append((f"DO{n}", SlotKind.STATEMENT))
        if self.else_body is not None:
            result.append(("ELSE", SlotKind.STATEMENT))
        return result

    def get_slot(self, name: str):
        self.slot_kind(name)
        if name == "ELSE":
            return self.else_body
        branch = self.branches[int(name[2:])]
        return branch.condition if name.startswith("IF") else branch.body

    def set_slot(self, name: str, content):
        kind = self.slot_kind(name)
        if kind == SlotKind.STATEMENT:
            content = list(content or [])
        if name == "ELSE":
            self.else_body = content
            return
        branch = self.branches[int(name[2:])]
        if name.startswith("IF"):
            branch.condition = content
        else:
            branch.body = content

    # Mutator

    def extra_state(self) -> Optional[Dict[str, object]]:
        state: Dict[str, object] = {}
        if len(self.branches) > 1:
            state["elseIfCount"] = len(self.branches) - 1
        if self.else_body is not None:
            state["hasElse"] = True
        return state or None

    def apply_extra_state(self, state: Optional[Dict[str, object]]):
        state = state or {}
        count = state.get("elseIfCount", 0) or 0
        if not isinstance(count, int) or isinstance(count, bool):
            raise ValueError(f"elseIfCount must be an integer, got {count!r}")
        count = max(count, 0)
        self.branches = [IfBranch() for _ in range(count + 1)]
        self.else_body = [] if state.get("hasElse") else None

    def add_else_if(self):
        self.branches.append(IfBranch())

    def remove_else_if(self):
        """Drop the last elif arm together with its contents"""
        if len(self.branches) > 1:
            self.branches.pop()

    def set_has_else(self, has_else: bool):
        if has_else and self.else_body is None:
            self.else_body = []
        elif not has_else:
            self.else_body = None

    def summary(self) -> str:
        text = "if"
        if len(self.branches) > 1:
            text += f" / elif x{len(self.branches) - 1}"
        if self.else_body is not None:
            text += " / else"
        if not self.enabled:
            text += " (disabled)"
        return text

    def render(self, gen):
        lines = []
        for n, branch in enumerate(self.branches):
            condition = gen.value(branch.condition, Order.NONE, "False")
            keyword = "if" if n == 0 else "elif"
            lines.append(f"{keyword} {condition}:")
            lines.append(Indented(gen.statements(branch.body) or ["pass"]))
        if self.else_body is not None:
            lines.append("else:")
            lines.append(Indented(gen.statements(self.else_body) or ["pass"]))
        return lines


class LogicCompareBlock(BaseBlock):
    block_type: Literal["logic_compare"] = "logic_compare"
    LABEL = "compare"
    KIND = BlockKind.VALUE
    FIELDS = (
        DropdownField(name="OP", label="Operator", options=(
            ("=", "EQ"), ("≠", "NEQ"), ("<", "LT"), ("≤", "LTE"), (">", "GT"), ("≥", "GTE"),
        )),
    )
    VALUE_SLOTS = ("A", "B")

    OPERATORS: ClassVar[Dict[str, str]] = {
        "EQ": "==",
        "NEQ": "!=",
        "LT": "<",
        "LTE": "<=",
        "GT": ">",
        "GTE": ">=",
    }

    op: str = Field("EQ", alias="OP")
    a: Optional["BlockUnion"] = Field(None, alias="A")
    b: Optional["BlockUnion"] = Field(None, alias="B")

    def render(self, gen):
        operator = self.OPERATORS.get(self.op)
        if operator is None:
            return Expression("None", Order.ATOMIC)
        left = gen.value(self.a, Order.RELATIONAL, "0")
        right = gen.value(self.b, Order.RELATIONAL, "0")
        return Expression(f"{left} {operator} {right}", Order.RELATIONAL)


class LogicOperationBlock(BaseBlock):
    block_type: Literal["logic_operation"] = "logic_operation"
    LABEL = "logic"
    KIND = BlockKind.VALUE
    FIELDS = (
        DropdownField(name="OP", label="Operator", options=(("and", "AND"), ("or", "OR"))),
    )
    VALUE_SLOTS = ("A", "B")

    op: str = Field("AND", alias="OP")
    a: Optional["BlockUnion"] = Field(None, alias="A")
    b: Optional["BlockUnion"] = Field(None, alias="B")

    def render(self, gen):
        # Anything but AND falls back to "or"
        if self.op == "AND":
            operator, order, missing = "and", Order.LOGICAL_AND, "True"
        else:
            operator, order, missing = "or", Order.LOGICAL_OR, "False"
        left = gen.value(self.a, order)
        right = gen.value(self.b, order)
        if not left and not right:
            left = right = "False"
        else:
            left = left or missing
            right = right or missing
        return Expression(f"{left} {operator} {right}", order)


class LogicNegateBlock(BaseBlock):
    block_type: Literal["logic_negate"] = "logic_negate"
    LABEL = "not"
    KIND = BlockKind.VALUE
    VALUE_SLOTS = ("BOOL",)

    operand: Optional["BlockUnion"] = Field(None, alias="BOOL")

    def render(self, gen):
        operand = gen.value(self.operand, Order.LOGICAL_NOT, "True")
        return Expression(f"not {operand}", Order.LOGICAL_NOT)


class LogicBooleanBlock(BaseBlock):
    block_type: Literal["logic_boolean"] = "logic_boolean"
    LABEL = "boolean"
    KIND = BlockKind.VALUE
    FIELDS = (
        DropdownField(name="BOOL", label="Value", options=(("true", "TRUE"), ("false", "FALSE"))),
    )

    value: str = Field("TRUE", alias="BOOL")

    def render(self, gen):
        return Expression("True" if self.value == "TRUE" else "False", Order.ATOMIC)


class LogicTernaryBlock(BaseBlock):
    block_type: Literal["logic_ternary"] = "logic_ternary"
    LABEL = "test"
    KIND = BlockKind.VALUE
    VALUE_SLOTS = ("IF", "THEN", "ELSE")

    condition: Optional["BlockUnion"] = Field(None, alias="IF")
    then: Optional["BlockUnion"] = Field(None, alias="THEN")
    otherwise: Optional["BlockUnion"] = Field(None, alias="ELSE")

    def render(self, gen):
        condition = gen.value(self.condition, Order.CONDITIONAL, "False")
        then = gen.value(self.then, Order.CONDITIONAL, "None")
        otherwise = gen.value(self.otherwise, Order.CONDITIONAL, "None")
        return Expression(f"{then} if {condition} else {otherwise}", Order.CONDITIONAL)
