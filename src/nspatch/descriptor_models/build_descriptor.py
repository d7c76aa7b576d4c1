"""
Pydantic data models for a parsed Gradle build descriptor.

The representation is deliberately minimal: a tree of brace-delimited blocks,
each holding the ordered list of plain declarations found directly inside it.
Offsets refer to positions in the original descriptor text, so edits can be
applied to the text without re-rendering it.
"""

from typing import Iterator, List, Optional

from pydantic import BaseModel, Field


DEFAULT_INDENT = "    "


class Declaration(BaseModel):
    """
    A single statement that is not a block, e.g. `compileSdk 33`.
    """

    key: str = Field(..., description="Leading identifier of the statement")
    text: str = Field(..., description="Statement source text")
    start: int = Field(..., description="Offset of the first character")
    end: int = Field(..., description="Offset just past the last character")


class Block(BaseModel):
    """
    A brace-delimited block such as `android { ... }`.
    """

    name: str = Field(..., description="Last identifier of the block header")
    header: str = Field(..., description="Source text preceding the opening brace")
    start: int
    open_brace: int
    close_brace: Optional[int] = Field(None, description="None when the block is unterminated")
    depth: int = 0
    indent: str = ""
    child_indent: Optional[str] = None
    first_item: Optional[int] = Field(None, description="Offset of the first code inside the block")
    after_brace: Optional[int] = Field(
        None,
        description="Offset past the blanks and comments that share the opening brace's line; "
        "None when such a comment is unterminated",
    )
    declarations: List[Declaration] = Field(default_factory=list)
    children: List["Block"] = Field(default_factory=list)

    def has_declaration(self, key: str) -> bool:
        """Check if a declaration with the given key sits directly in this block."""
        return any(d.key == key for d in self.declarations)

    def get_declaration(self, key: str) -> Optional[Declaration]:
        for declaration in self.declarations:
            if declaration.key == key:
                return declaration
        return None

    def iter_blocks(self) -> Iterator["Block"]:
        """Yield this block and all nested blocks in document order."""
        yield self
        for child in self.children:
            yield from child.iter_blocks()

    def body_indent(self) -> str:
        """Indentation to use for a new line inside this block."""
        if self.child_indent is not None:
            return self.child_indent
        return self.indent + DEFAULT_INDENT


class BuildDescriptor(BaseModel):
    """
    A parsed build descriptor (build.gradle or build.gradle.kts).
    """

    text: str
    blocks: List[Block] = Field(default_factory=list)
    declarations: List[Declaration] = Field(default_factory=list)

    @property
    def has_namespace_declaration(self) -> bool:
        """The namespace keyword occurs anywhere in the text."""
        return "namespace" in self.text

    def iter_blocks(self) -> Iterator[Block]:
        for block in self.blocks:
            yield from block.iter_blocks()

    def find_block(self, name: str) -> Optional[Block]:
        """
        Find the first block with the given name, in document order.

        Args:
            name: Block name, e.g. "android"

        Returns:
            Block or None if not found
        """
        for block in self.iter_blocks():
            if block.name == name:
                return block
        return None
