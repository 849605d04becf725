"""
Rendered output of a single block.

A statement block renders to a list of lines. Nested lines are wrapped in
``Indented`` and the printer adds one indentation level for them. A value
block renders to an ``Expression`` carrying its text and Python precedence.
"""

from typing import List, Sequence, Union


class Order:
    """Python operator precedence, lowest number binds tightest"""
    ATOMIC = 0
    COLLECTION = 1
    STRING_CONVERSION = 1
    MEMBER = 2.1
    FUNCTION_CALL = 2.2
    EXPONENTIATION = 3
    UNARY_SIGN = 4
    BITWISE_NOT = 4
    MULTIPLICATIVE = 5
    ADDITIVE = 6
    BITWISE_SHIFT = 7
    BITWISE_AND = 8
    BITWISE_XOR = 9
    BITWISE_OR = 10
    RELATIONAL = 11
    LOGICAL_NOT = 12
    LOGICAL_AND = 13
    LOGICAL_OR = 14
    CONDITIONAL = 15
    LAMBDA = 16
    NONE = 99

    # (outer, inner) pairs that chain without parentheses
    OVERRIDES = (
        (FUNCTION_CALL, MEMBER),      # a.b()
        (FUNCTION_CALL, FUNCTION_CALL),
        (MEMBER, MEMBER),
        (MEMBER, FUNCTION_CALL),      # a().b
        (LOGICAL_NOT, LOGICAL_NOT),   # not not x
        (LOGICAL_AND, LOGICAL_AND),
        (LOGICAL_OR, LOGICAL_OR),
    )

    @classmethod
    def needs_parens(cls, inner: float, outer: float) -> bool:
        """True when an expression of order ``inner`` must be wrapped to sit in an ``outer`` slot"""
        if outer > inner:
            return False
        if outer == inner and outer in (cls.ATOMIC, cls.NONE):
            return False
        return (outer, inner) not in cls.OVERRIDES


class Expression:
    """Text of a value block together with its precedence"""

    __slots__ = ("text", "order")

    def __init__(self, text: str, order: float = Order.ATOMIC):
        self.text = text
        self.order = order

    def __eq__(self, other):
        if not isinstance(other, Expression):
            return NotImplemented
        return (self.text, self.order) == (other.text, other.order)

    def __repr__(self):
        return f"Expression({self.text!r}, {self.order})"


class Indented:
    """Group of lines printed one level deeper than the surrounding lines"""

    __slots__ = ("lines",)

    def __init__(self, lines: Sequence["Line"] = ()):
        self.lines: List[Line] = list(lines)

    def __eq__(self, other):
        if not isinstance(other, Indented):
            return NotImplemented
        return self.lines == other.lines

    def __repr__(self):
        return f"Indented({self.lines!r})"


Line = Union[str, Indented]
Lines = List[Line]
Fragment = Union[Lines, Expression]
