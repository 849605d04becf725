"""
Workspace model: the block graph being edited.

A workspace is a list of positioned stacks. Each stack is a sequence of
blocks sitting at the top level; usually a single event block that owns the
rest of the program through its statement slot.
"""
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import BaseModel, Field

from editor.blocks import BaseBlock, BlockUnion, SlotKind


def _index_of(items: list, target) -> int:
    """list.index by identity (models compare equal by value)"""
    for index, item in enumerate(items):
        if item is target:
            return index
    raise ValueError("item not in list")


class BlockStack(BaseModel):
    x: Union[int, float] = 0
    y: Union[int, float] = 0
    blocks: List[BlockUnion] = Field(default_factory=list)


class BlockLocation:
    """Where a block sits: a stack or a parent block slot, and its index there"""

    def __init__(self, container: List[BaseBlock], index: int,
                 parent: Optional[BaseBlock] = None, slot: Optional[str] = None,
                 stack: Optional[BlockStack] = None):
        self.container = container
        self.index = index
        self.parent = parent
        self.slot = slot
        self.stack = stack

    @property
    def is_value_slot(self) -> bool:
        return self.parent is not None and self.parent.slot_kind(self.slot) == SlotKind.VALUE


class Workspace(BaseModel):
    stacks: List[BlockStack] = Field(default_factory=list)
    # Document keys the editor does not interpret (variables, ...)
    extra: Dict[str, Any] = Field(default_factory=dict)

    def ordered_stacks(self) -> List[BlockStack]:
        """Stacks in display order: top to bottom, then left to right"""
        return sorted(self.stacks, key=lambda stack: (stack.y, stack.x))

    def is_empty(self) -> bool:
        return not any(stack.blocks for stack in self.stacks)

    def add_stack(self, block: BaseBlock, x: Union[int, float] = 0,
                  y: Optional[Union[int, float]] = None) -> BlockStack:
        """Place ``block`` on the workspace below the existing stacks"""
        if y is None:
            y = max((stack.y for stack in self.stacks), default=-40) + 40
        stack = BlockStack(x=x, y=y, blocks=[block])
        self.stacks.append(stack)
        return stack

    def iter_blocks(self) -> Iterator[BaseBlock]:
        """Every block in the workspace, depth first"""
        def walk(block):
            yield block
            for child in block.children():
                yield from walk(child)

        for stack in self.stacks:
            for block in stack.blocks:
                yield from walk(block)

    def locate(self, target: BaseBlock) -> Optional[BlockLocation]:
        """Find ``target`` by identity"""
        def search(blocks: List[BaseBlock], parent, slot, stack) -> Optional[BlockLocation]:
            for index, block in enumerate(blocks):
                if block is target:
                    return BlockLocation(blocks, index, parent, slot, stack)
                for name, kind in block.slots():
                    content = block.get_slot(name)
                    if kind == SlotKind.STATEMENT:
                        found = search(content, block, name, None)
                    elif content is target:
                        found = BlockLocation([content], 0, block, name, None)
                    elif content is not None:
                        found = search([content], block, name, None)
                    else:
                        found = None
                    if found:
                        return found
            return None

        for stack in self.stacks:
            found = search(stack.blocks, None, None, stack)
            if found:
                return found
        return None

    def remove(self, target: BaseBlock) -> bool:
        """Detach ``target`` (with its children); empty stacks are dropped"""
        location = self.locate(target)
        if location is None:
            return False
        if location.is_value_slot:
            location.parent.set_slot(location.slot, None)
            return True
        del location.container[location.index]
        if location.stack is not None and not location.stack.blocks:
            del self.stacks[_index_of(self.stacks, location.stack)]
        return True

    def insert(self, parent: BaseBlock, slot: str, block: BaseBlock, index: Optional[int] = None):
        """Put ``block`` into a slot of ``parent``; a value slot is replaced"""
        if parent.slot_kind(slot) == SlotKind.VALUE:
            parent.set_slot(slot, block)
            return
        content = parent.get_slot(slot)
        if index is None:
            content.append(block)
        else:
            content.insert(index, block)

    def move(self, target: BaseBlock, offset: int) -> bool:
        """Move ``target`` up or down within its statement sequence"""
        location = self.locate(target)
        if location is None or location.is_value_slot:
            return False
        if location.stack is not None and len(location.container) == 1:
            # A lone top-level block moves with its whole stack
            stacks = self.ordered_stacks()
            position = _index_of(stacks, location.stack)
            other = position + offset
            if not 0 <= other < len(stacks):
                return False
            mine, theirs = stacks[position], stacks[other]
            if (mine.y, mine.x) == (theirs.y, theirs.x):
                # Same position: display order falls back to document order
                i, j = _index_of(self.stacks, mine), _index_of(self.stacks, theirs)
                self.stacks[i], self.stacks[j] = theirs, mine
                return True
            mine.x, theirs.x = theirs.x, mine.x
            mine.y, theirs.y = theirs.y, mine.y
            return True
        new_index = location.index + offset
        if not 0 <= new_index < len(location.container):
            return False
        container = location.container
        container[location.index], container[new_index] = container[new_index], container[location.index]
        return True
