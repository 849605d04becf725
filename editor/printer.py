from typing import List

from editor.fragments import Indented, Lines


class CodePrinter:
    """
    Accumulates rendered lines into a document.

    The printer is the only place that knows about indentation and line
    endings: it tracks the current depth, prefixes every non-empty line with
    the indent string and joins the result with newlines.
    """

    def __init__(self, indent: str = "  "):
        self.indent = indent
        self.depth = 0
        self._lines: List[str] = []

    def line(self, text: str):
        """Append one line at the current depth"""
        if text:
            self._lines.append(self.indent * self.depth + text)
        else:
            self._lines.append("")

    def blank_line(self):
        self._lines.append("")

    def write(self, lines: Lines):
        """Append rendered lines, descending one level for every Indented group"""
        for item in lines:
            if isinstance(item, Indented):
                self.depth += 1
                try:
                    self.write(item.lines)
                finally:
                    self.depth -= 1
            else:
                self.line(item)

    def getvalue(self) -> str:
        """Document text, terminated by exactly one newline (empty when nothing was printed)"""
        while self._lines and not self._lines[-1]:
            self._lines.pop()
        if not self._lines:
            return ""
        return "\n".join(self._lines) + "\n"
