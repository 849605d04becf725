"""
Base classes for editor blocks.

A block is a pydantic model tagged by ``block_type``. Field values and slot
contents are model attributes aliased to the names used in the project
document (``CAN_ID``, ``DO``...). The edit-time shape lives in class-level
constants: ``FIELDS`` holds the field specs, ``VALUE_SLOTS`` and
``STATEMENT_SLOTS`` the names of the child slots.
"""

import math
import uuid
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict


class FieldValueError(ValueError):
    """Raised when an edited field value violates the field's constraints"""


class BlockKind:
    """How a block connects to its neighbours"""
    EVENT = "event"          # top-level only, owns a statement slot
    STATEMENT = "statement"  # sits in a statement slot
    VALUE = "value"          # plugs into a value slot


class SlotKind:
    VALUE = "value"
    STATEMENT = "statement"


def format_number(value: Any) -> str:
    """
    Render a numeric field value as it appears in the editor.

    Integral numbers lose their decimal part (1.0 -> "1"), other floats use the
    shortest representation that round-trips (0.5 -> "0.5").
    """
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    try:
        return format_number(float(value))
    except (TypeError, ValueError):
        return str(value)


def new_block_id() -> str:
    return uuid.uuid4().hex[:20]


# ── Field specs ──────────────────────────────────────────────────────────────

class FieldSpec(BaseModel):
    """Edit-time description of one named block field"""
    model_config = ConfigDict(frozen=True)

    name: str
    label: str = ""

    def coerce(self, value: Any) -> Any:
        return value

    def check(self, value: Any) -> Optional[str]:
        """Return an error message when ``value`` is not acceptable, else None"""
        try:
            self.coerce(value)
        except FieldValueError as e:
            return str(e)
        return None


class NumberField(FieldSpec):
    """Numeric field clamped to [minimum, maximum] and rounded to ``precision``"""
    default: Union[int, float] = 0
    minimum: Union[int, float] = -math.inf
    maximum: Union[int, float] = math.inf
    precision: Union[int, float] = 0

    def _decimals(self) -> int:
        text = repr(float(self.precision))
        if 'e' in text or float(self.precision).is_integer():
            return 0
        return len(text.split('.')[1])

    def coerce(self, value: Any) -> Union[int, float]:
        if isinstance(value, bool):
            raise FieldValueError(f"{self.name}: {value!r} is not a number")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise FieldValueError(f"{self.name}: {value!r} is not a number")
        if math.isnan(number):
            raise FieldValueError(f"{self.name}: value is not a number")

        number = float(min(max(number, self.minimum), self.maximum))
        if self.precision:
            number = math.floor(number / self.precision + 0.5) * self.precision
            number = round(number, self._decimals())
            # Rounding can step just past a bound that is not a multiple of precision
            number = float(min(max(number, self.minimum), self.maximum))

        if number.is_integer():
            return int(number)
        return number

    def check(self, value: Any) -> Optional[str]:
        error = super().check(value)
        if error:
            return error
        number = float(value)
        if number < self.minimum or number > self.maximum:
            return (f"{self.name}: {format_number(value)} is outside "
                    f"{format_number(self.minimum)}..{format_number(self.maximum)}")
        return None


class DropdownField(FieldSpec):
    """Enumerated field; ``options`` holds (label, value) pairs"""
    options: Tuple[Tuple[str, str], ...] = ()

    @property
    def values(self) -> List[str]:
        return [value for _, value in self.options]

    @property
    def default(self) -> Optional[str]:
        return self.options[0][1] if self.options else None

    def label_for(self, value: Any) -> str:
        for label, option in self.options:
            if option == value:
                return label
        return str(value)

    def coerce(self, value: Any) -> str:
        if value not in self.values:
            raise FieldValueError(f"{self.name}: {value!r} is not one of {', '.join(self.values)}")
        return value


# ── Blocks ───────────────────────────────────────────────────────────────────

class BaseBlock(BaseModel):
    """Base class of every block variant"""
    model_config = ConfigDict(populate_by_name=True)

    block_type: str
    id: Optional[str] = None
    enabled: bool = True

    LABEL: ClassVar[str] = ""
    KIND: ClassVar[str] = BlockKind.STATEMENT
    FIELDS: ClassVar[Tuple[FieldSpec, ...]] = ()
    VALUE_SLOTS: ClassVar[Tuple[str, ...]] = ()
    STATEMENT_SLOTS: ClassVar[Tuple[str, ...]] = ()

    # Shape

    @classmethod
    def attribute_for(cls, name: str) -> str:
        """Model attribute holding the field or slot called ``name`` in the document"""
        for attr, info in cls.model_fields.items():
            if info.alias == name or attr == name:
                return attr
        raise KeyError(f"{cls.__name__} has no field or slot {name!r}")

    @classmethod
    def field_spec(cls, name: str) -> FieldSpec:
        for spec in cls.FIELDS:
            if spec.name == name:
                return spec
        raise KeyError(f"{cls.__name__} has no field {name!r}")

    @classmethod
    def default_fields(cls) -> Dict[str, Any]:
        return {spec.name: spec.default for spec in cls.FIELDS}

    def slots(self) -> List[Tuple[str, str]]:
        """(name, SlotKind) pairs in display order"""
        return ([(name, SlotKind.VALUE) for name in self.VALUE_SLOTS] +
                [(name, SlotKind.STATEMENT) for name in self.STATEMENT_SLOTS])

    def slot_kind(self, name: str) -> str:
        for slot_name, kind in self.slots():
            if slot_name == name:
                return kind
        raise KeyError(f"{self.block_type} has no slot {name!r}")

    # Fields

    def get_field(self, name: str) -> Any:
        return getattr(self, self.attribute_for(name))

    def set_field(self, name: str, value: Any):
        """Set a field from the editor; the value is validated against the field spec"""
        spec = self.field_spec(name)
        setattr(self, self.attribute_for(name), spec.coerce(value))

    def update_fields(self, changes: Dict[str, Any]) -> List[str]:
        """
        Apply edited field values all at once.

        Only the fields in ``changes`` are checked, so a stored value outside
        the options does not block edits to the other fields.

        Returns:
            The constraint violations; nothing is stored when there are any
        """
        errors = []
        for name, value in changes.items():
            error = self.field_spec(name).check(value)
            if error:
                errors.append(error)
        if errors:
            return errors

        for name, value in changes.items():
            self.set_field(name, value)
        return []

    def field_values(self) -> Dict[str, Any]:
        return {spec.name: self.get_field(spec.name) for spec in self.FIELDS}

    def check_fields(self) -> List[str]:
        """Return the constraint violations of the current field values"""
        errors = []
        for spec in self.FIELDS:
            error = spec.check(self.get_field(spec.name))
            if error:
                errors.append(error)
        return errors

    # Slots

    def get_slot(self, name: str) -> Union[List["BaseBlock"], "BaseBlock", None]:
        self.slot_kind(name)
        return getattr(self, self.attribute_for(name))

    def set_slot(self, name: str, content: Union[List["BaseBlock"], "BaseBlock", None]):
        if self.slot_kind(name) == SlotKind.STATEMENT:
            content = list(content or [])
        setattr(self, self.attribute_for(name), content)

    def accepts(self, slot_name: str, child: "BaseBlock") -> bool:
        """Edit-time connection check"""
        if self.slot_kind(slot_name) == SlotKind.VALUE:
            return child.KIND == BlockKind.VALUE
        return child.KIND == BlockKind.STATEMENT

    def children(self) -> Iterator["BaseBlock"]:
        for name, kind in self.slots():
            content = self.get_slot(name)
            if kind == SlotKind.STATEMENT:
                yield from content
            elif content is not None:
                yield content

    # Mutator state (only blocks with a variable shape override these)

    def extra_state(self) -> Optional[Dict[str, Any]]:
        return None

    def apply_extra_state(self, state: Optional[Dict[str, Any]]):
        pass

    # Output

    def imports(self) -> Tuple[str, ...]:
        """Modules the rendered code needs at the top of the document"""
        return ()

    def render(self, gen):
        raise NotImplementedError(f"{self.block_type} has no renderer")

    def summary(self) -> str:
        """One-line description for the workspace tree"""
        parts = [self.LABEL or self.block_type]
        for spec in self.FIELDS:
            value = self.get_field(spec.name)
            if isinstance(spec, DropdownField):
                parts.append(spec.label_for(value))
            else:
                parts.append(format_number(value))
        if not self.enabled:
            parts.append("(disabled)")
        return " ".join(parts)
