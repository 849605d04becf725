import json
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from editor.blocks import BLOCK_TYPES, BaseBlock, SlotKind
from editor.logger import get_logger
from editor.workspace import BlockStack, Workspace


class SerializationError(ValueError):
    """Raised when a project document cannot be turned into a workspace"""


class WorkspaceSerializer:
    """
    Converts workspaces to and from the JSON project document.

    Document layout:
    - {"blocks": {"languageVersion": 0, "blocks": [<stack>, ...]}, ...}
    - every stack is its first block record plus "x"/"y"; following blocks
      hang off "next": {"block": {...}}
    - block records: type, id, enabled, extraState, fields, inputs, next
    - statement inputs hold a "next" chain, value inputs a single block
    Top-level keys other than "blocks" (variables, ...) are kept verbatim.
    """

    LANGUAGE_VERSION = 0

    def __init__(self):
        self.logger = get_logger()

    # ── Document -> workspace ────────────────────────────────────────────────

    def from_document(self, data: Any) -> Workspace:
        if not isinstance(data, dict):
            raise SerializationError("Project document must be a JSON object")

        section = data.get("blocks") or {}
        if not isinstance(section, dict):
            raise SerializationError("'blocks' must be an object")
        records = section.get("blocks") or []
        if not isinstance(records, list):
            raise SerializationError("'blocks.blocks' must be a list")

        stacks = []
        for number, record in enumerate(records, start=1):
            blocks = self._parse_chain(record, f"stack {number}")
            try:
                stacks.append(BlockStack(x=record.get("x", 0), y=record.get("y", 0), blocks=blocks))
            except ValidationError as e:
                raise SerializationError(f"stack {number}: invalid position: {e}") from e

        extra = {key: value for key, value in data.items() if key != "blocks"}
        workspace = Workspace(stacks=stacks, extra=extra)
        self.logger.debug(f"Loaded {len(stacks)} stacks, {sum(1 for _ in workspace.iter_blocks())} blocks",
                          category="serializer")
        return workspace

    def _connection_block(self, connection: Any, where: str) -> Optional[Dict[str, Any]]:
        if not connection:
            return None
        if not isinstance(connection, dict):
            raise SerializationError(f"{where}: connection must be an object")
        return connection.get("block") or connection.get("shadow")

    def _parse_chain(self, record: Any, where: str) -> List[BaseBlock]:
        blocks = []
        while record:
            block = self._parse_block(record, where)
            blocks.append(block)
            record = self._connection_block(record.get("next"), f"{where} > {block.block_type}")
        return blocks

    def _parse_block(self, record: Any, where: str) -> BaseBlock:
        if not isinstance(record, dict) or "type" not in record:
            raise SerializationError(f"{where}: block record without a type")

        block_type = record["type"]
        block_cls = BLOCK_TYPES.get(block_type)
        if block_cls is None:
            raise SerializationError(f"{where}: unknown block type {block_type!r}")
        where = f"{where} > {block_type}"

        fields = self._object_entry(record, "fields", where)
        data: Dict[str, Any] = {"id": record.get("id"), "enabled": self._is_enabled(record)}
        for spec in block_cls.FIELDS:
            if spec.name in fields:
                data[spec.name] = fields[spec.name]
        ignored = set(fields) - {spec.name for spec in block_cls.FIELDS}
        if ignored:
            self.logger.debug(f"{where}: ignoring fields {', '.join(sorted(ignored))}", category="serializer")

        try:
            block = block_cls(**data)
        except ValidationError as e:
            raise SerializationError(f"{where}: {e}") from e

        try:
            block.apply_extra_state(self._object_entry(record, "extraState", where))
        except ValueError as e:
            raise SerializationError(f"{where}: {e}") from e

        inputs = self._object_entry(record, "inputs", where)
        for name, kind in block.slots():
            child = self._connection_block(inputs.get(name), f"{where} > {name}")
            if kind == SlotKind.STATEMENT:
                block.set_slot(name, self._parse_chain(child, f"{where} > {name}") if child else [])
            else:
                block.set_slot(name, self._parse_block(child, f"{where} > {name}") if child else None)

        unknown = set(inputs) - {name for name, _ in block.slots()}
        if unknown:
            self.logger.warning(f"{where}: dropping unknown inputs {', '.join(sorted(unknown))}",
                                category="serializer")
        return block

    @staticmethod
    def _object_entry(record: Dict[str, Any], key: str, where: str) -> Dict[str, Any]:
        value = record.get(key) or {}
        if not isinstance(value, dict):
            raise SerializationError(f"{where}: '{key}' must be an object")
        return value

    @staticmethod
    def _is_enabled(record: Dict[str, Any]) -> bool:
        if record.get("disabledReasons"):
            return False
        return bool(record.get("enabled", True))

    # ── Workspace -> document ────────────────────────────────────────────────

    def to_document(self, workspace: Workspace) -> Dict[str, Any]:
        records = [
            self._dump_chain(stack.blocks, stack)
            for stack in workspace.stacks
            if stack.blocks
        ]
        document: Dict[str, Any] = {
            "blocks": {
                "languageVersion": self.LANGUAGE_VERSION,
                "blocks": records
            }
        }
        document.update(workspace.extra)
        return document

    def _dump_chain(self, blocks: List[BaseBlock], stack: Optional[BlockStack] = None) -> Dict[str, Any]:
        first = self._dump_block(blocks[0], stack)
        current = first
        for block in blocks[1:]:
            record = self._dump_block(block)
            current["next"] = {"block": record}
            current = record
        return first

    def _dump_block(self, block: BaseBlock, stack: Optional[BlockStack] = None) -> Dict[str, Any]:
        record: Dict[str, Any] = {"type": block.block_type}
        if block.id:
            record["id"] = block.id
        if stack is not None:
            record["x"] = stack.x
            record["y"] = stack.y
        if not block.enabled:
            record["enabled"] = False

        extra_state = block.extra_state()
        if extra_state:
            record["extraState"] = extra_state

        fields = block.field_values()
        if fields:
            record["fields"] = fields

        inputs = {}
        for name, kind in block.slots():
            content = block.get_slot(name)
            if kind == SlotKind.STATEMENT:
                if content:
                    inputs[name] = {"block": self._dump_chain(content)}
            elif content is not None:
                inputs[name] = {"block": self._dump_block(content)}
        if inputs:
            record["inputs"] = inputs
        return record

    # ── Text and files ───────────────────────────────────────────────────────

    def load_document(self, text: str) -> Workspace:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SerializationError(f"Invalid JSON: {e}") from e
        return self.from_document(data)

    def dump_document(self, workspace: Workspace) -> str:
        return json.dumps(self.to_document(workspace), indent=2, ensure_ascii=False)

    def load_workspace(self, file_path: str) -> Workspace:
        """
        Read a project file.

        Raises:
            OSError: the file cannot be read
            SerializationError: the content is not a valid project document
        """
        with open(file_path, 'r', encoding='utf-8') as f:
            try:
                text = f.read()
            except UnicodeDecodeError as e:
                raise SerializationError(f"Project file is not UTF-8 text: {e}") from e
        return self.load_document(text)

    def save_workspace(self, workspace: Workspace, file_path: str) -> int:
        """Write a project file, returning the number of characters written"""
        text = self.dump_document(workspace)
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(text)
        return len(text)
