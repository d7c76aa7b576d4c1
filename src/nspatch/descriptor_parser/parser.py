"""
Structural parser for Gradle build descriptors.

Handles both the Groovy and the Kotlin DSL. Only the shape that matters for
editing is recovered: which brace-delimited blocks exist, where their braces
are, and which plain statements sit directly inside them. Comments and string
literals (including ${...} interpolation) are skipped, so a brace or a block
name that only appears inside them is never mistaken for structure.
"""

import re
from typing import List, Optional

from nspatch.descriptor_models import Block, BuildDescriptor, Declaration


_HEADER_NAME = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)\s*(?:\([^()]*\))?\s*$")
_DECLARATION_KEY = re.compile(r"[A-Za-z_][A-Za-z0-9_.]*")
_WHITESPACE = " \t\r\f"


class _Frame:
    """
    Parsing state for one nesting level.
    """

    def __init__(self, block: Optional[Block]):
        self.block = block
        self.declarations: List[Declaration] = block.declarations if block else []
        self.children: List[Block] = block.children if block else []
        self.paren_depth = 0
        self.stmt_start: Optional[int] = None
        self.stmt_end: Optional[int] = None


class DescriptorParser:
    """
    Parses descriptor text into a BuildDescriptor.

    Never raises on malformed input: unbalanced closing braces are kept as
    plain code and unterminated blocks are reported with close_brace=None.
    """

    def __init__(self, text: str):
        self.text = text

    def parse(self) -> BuildDescriptor:
        text = self.text
        n = len(text)
        root = _Frame(None)
        stack = [root]

        i = 0
        while i < n:
            c = text[i]
            frame = stack[-1]

            if text.startswith("//", i):
                i = self._skip_line_comment(i)
                continue
            if text.startswith("/*", i):
                i = self._skip_block_comment(i)
                continue
            if c == '"' or c == "'":
                end = self._skip_string(i)
                self._mark_code(frame, i, end)
                i = end
                continue
            if c == "\n" or c == ";":
                if frame.paren_depth == 0:
                    self._flush(frame)
                i += 1
                continue
            if c in _WHITESPACE:
                i += 1
                continue

            if c == "{":
                block = self._open_block(frame, i, len(stack) - 1)
                stack.append(_Frame(block))
                i += 1
                continue
            if c == "}" and len(stack) > 1:
                self._flush(frame)
                frame.block.close_brace = i
                stack.pop()
                i += 1
                continue

            if c in "([":
                frame.paren_depth += 1
            elif c in ")]":
                frame.paren_depth = max(0, frame.paren_depth - 1)
            self._mark_code(frame, i, i + 1)
            i += 1

        for frame in reversed(stack):
            self._flush(frame)

        return BuildDescriptor(
            text=text, blocks=root.children, declarations=root.declarations
        )

    def _skip_line_comment(self, i: int) -> int:
        end = self.text.find("\n", i)
        return len(self.text) if end == -1 else end

    def _skip_block_comment(self, i: int) -> int:
        end = self.text.find("*/", i + 2)
        return len(self.text) if end == -1 else end + 2

    def _skip_string(self, i: int) -> int:
        """
        Return the offset just past the string literal starting at i.
        """
        text = self.text
        n = len(text)
        quote = text[i]
        triple = text.startswith(quote * 3, i)
        delimiter = quote * 3 if triple else quote
        j = i + len(delimiter)

        while j < n:
            c = text[j]
            if c == "\\":
                j += 2
                continue
            if text.startswith(delimiter, j):
                return j + len(delimiter)
            if c == "\n" and not triple:
                # Unterminated single-line string ends with the line
                return j
            if quote == '"' and text.startswith("${", j):
                j = self._skip_interpolation(j + 2)
                continue
            j += 1

        return n

    def _skip_interpolation(self, j: int) -> int:
        text = self.text
        depth = 1
        while j < len(text):
            c = text[j]
            if c == '"' or c == "'":
                j = self._skip_string(j)
                continue
            if c == "{":
                depth += 1
            elif c == "}":
                depth -= 1
                if depth == 0:
                    return j + 1
            j += 1
        return j

    def _brace_line_end(self, i: int) -> Optional[int]:
        """
        Offset past the blanks and comments following i on its line.

        A block comment that starts on the line is skipped whole, even when it
        spans several lines. Returns None if such a comment is unterminated.
        """
        text = self.text
        while True:
            while i < len(text) and text[i] in " \t":
                i += 1
            if text.startswith("//", i):
                return self._skip_line_comment(i)
            if text.startswith("/*", i):
                if text.find("*/", i + 2) == -1:
                    return None
                i = self._skip_block_comment(i)
                continue
            return i

    def _line_indent(self, offset: int) -> str:
        line_start = self.text.rfind("\n", 0, offset) + 1
        line = self.text[line_start:offset]
        return line[: len(line) - len(line.lstrip(" \t"))]

    def _starts_line(self, offset: int) -> bool:
        line_start = self.text.rfind("\n", 0, offset) + 1
        return self.text[line_start:offset].strip() == ""

    def _mark_code(self, frame: _Frame, start: int, end: int) -> None:
        if frame.stmt_start is None:
            frame.stmt_start = start
            block = frame.block
            if block is not None:
                if block.first_item is None:
                    block.first_item = start
                if block.child_indent is None and self._starts_line(start):
                    block.child_indent = self._line_indent(start)
        frame.stmt_end = end

    def _flush(self, frame: _Frame) -> None:
        if frame.stmt_start is None:
            return

        statement = self.text[frame.stmt_start:frame.stmt_end].strip()
        match = _DECLARATION_KEY.match(statement)
        key = match.group(0) if match else statement.split()[0]
        frame.declarations.append(
            Declaration(
                key=key,
                text=statement,
                start=frame.stmt_start,
                end=frame.stmt_end,
            )
        )
        frame.stmt_start = None
        frame.stmt_end = None

    def _open_block(self, frame: _Frame, brace: int, depth: int) -> Block:
        self._mark_code(frame, brace, brace)
        start = frame.stmt_start
        header = self.text[start:brace].strip()
        match = _HEADER_NAME.search(header)

        block = Block(
            name=match.group(1) if match else "",
            header=header,
            start=start,
            open_brace=brace,
            depth=depth,
            indent=self._line_indent(start),
            after_brace=self._brace_line_end(brace + 1),
        )
        frame.children.append(block)
        frame.stmt_start = None
        frame.stmt_end = None
        return block


def parse_descriptor(text: str) -> BuildDescriptor:
    """Parse descriptor text into its block structure."""
    return DescriptorParser(text).parse()
