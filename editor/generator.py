#!/usr/bin/env python3

"""
Code generation: workspace -> Python source for the robot runtime.

The driver visits the workspace's stacks in display order and asks every
enabled block to render itself. Blocks get the driver passed in so they can
render their slots through ``statements`` and ``value``. The resulting lines
are handed to a CodePrinter, which owns indentation and newlines.
"""

from typing import Iterable, List, Optional

from editor.blocks import BaseBlock
from editor.fragments import Expression, Lines, Order
from editor.logger import get_logger
from editor.printer import CodePrinter
from editor.settings import load_settings
from editor.workspace import Workspace

# Module-level logger for functions
logger = get_logger()


class CodeGenerator:
    """Renders a workspace into a Generated Document"""

    def __init__(self, indent: str = "  "):
        self.indent = indent

    def generate(self, workspace: Workspace) -> str:
        printer = CodePrinter(self.indent)

        imports = self.collect_imports(workspace)
        for module in imports:
            printer.line(f"import {module}")
        if imports:
            printer.blank_line()
            printer.blank_line()

        rendered_stacks = 0
        for stack in workspace.ordered_stacks():
            lines = self.statements(stack.blocks)
            if not lines:
                continue
            if rendered_stacks:
                printer.blank_line()
            printer.write(lines)
            rendered_stacks += 1

        code = printer.getvalue()
        logger.debug(f"Generated {len(code.splitlines())} lines from {rendered_stacks} stacks", category="generator")
        return code

    def render(self, block: BaseBlock):
        return block.render(self)

    def statements(self, blocks: Iterable[BaseBlock]) -> Lines:
        """Render a statement sequence in order; disabled blocks produce nothing"""
        lines: Lines = []
        for block in blocks:
            if not block.enabled:
                logger.debug(f"Skipping disabled block {block.block_type}", category="generator")
                continue
            fragment = self.render(block)
            if isinstance(fragment, Expression):
                # A value block left loose in a sequence is emitted as a bare expression
                lines.append(fragment.text)
            else:
                lines.extend(fragment)
        return lines

    def value(self, block: Optional[BaseBlock], outer_order: float, default: str = "") -> str:
        """
        Render the block plugged into a value slot.

        Args:
            block: Block in the slot (None when empty)
            outer_order: Precedence of the context the expression lands in
            default: Text used when the slot is empty or its block is disabled

        Returns:
            Expression text, parenthesised when the context binds tighter
        """
        if block is None or not block.enabled:
            return default
        fragment = self.render(block)
        if not isinstance(fragment, Expression):
            # Statement block in a value slot: keep its first line, no type checking
            logger.debug(f"Statement block {block.block_type} used as a value", category="generator")
            fragment = Expression(fragment[0] if fragment and isinstance(fragment[0], str) else "",
                                  Order.NONE)
        if not fragment.text:
            return default
        if Order.needs_parens(fragment.order, outer_order):
            return f"({fragment.text})"
        return fragment.text

    def collect_imports(self, workspace: Workspace) -> List[str]:
        """Sorted module names required by the enabled blocks of the workspace"""
        modules = set()

        def walk(block: BaseBlock):
            if not block.enabled:
                return
            modules.update(block.imports())
            for child in block.children():
                walk(child)

        for stack in workspace.stacks:
            for block in stack.blocks:
                walk(block)
        return sorted(modules)


def generate_code(workspace: Workspace, settings: Optional[dict] = None) -> str:
    """Generate the document for ``workspace`` using the configured indent"""
    settings = settings or load_settings()
    indent = settings.get("generator", {}).get("indent", "  ")
    return CodeGenerator(indent).generate(workspace)
