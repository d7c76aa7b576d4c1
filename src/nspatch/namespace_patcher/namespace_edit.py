"""
Text-level namespace insertion.

Pure functions: no filesystem access, so they can be applied to any
descriptor text and checked for idempotence directly.
"""

from dataclasses import dataclass
from typing import Optional

from nspatch.descriptor_models import Block, BuildDescriptor
from nspatch.descriptor_parser import parse_descriptor
from nspatch.nspatch_config import DeclarationStyle
from nspatch.patch_config.plan_manager import PatchStatus


NAMESPACE_KEYWORD = "namespace"


@dataclass
class NamespaceEdit:
    """
    Result of applying the namespace patch to a descriptor text.
    """

    status: str
    text: str

    @property
    def changed(self) -> bool:
        return self.status == PatchStatus.PATCHED


def insert_declaration(
    descriptor: BuildDescriptor, block: Block, line: str
) -> Optional[str]:
    """
    Insert a declaration line after the block's opening brace.

    The line is indented like the block's existing children, or one level
    deeper than the block when it has none. Comments sharing the brace's line
    stay there; code sharing it is moved to a line of its own. Returns None
    when an unterminated comment follows the brace, since there is no safe
    place to insert.
    """
    anchor = block.after_brace
    if anchor is None:
        return None

    text = descriptor.text
    indent = block.body_indent()
    newline = "\r\n" if "\r\n" in text else "\n"

    if anchor >= len(text) or text[anchor] in "\r\n":
        if text[anchor - 1:anchor + 1] == "\r\n":
            anchor -= 1
        return text[:anchor] + newline + indent + line + text[anchor:]

    trailing_indent = block.indent if anchor == block.close_brace else indent
    return (
        text[:anchor].rstrip(" \t")
        + newline
        + indent
        + line
        + newline
        + trailing_indent
        + text[anchor:]
    )


def apply_namespace_patch(
    text: str,
    namespace: str,
    block_name: str = "android",
    style: DeclarationStyle = DeclarationStyle.GROOVY,
) -> NamespaceEdit:
    """
    Ensure the descriptor text declares a namespace.

    Args:
        text: Descriptor text
        namespace: Namespace to declare
        block_name: Block that receives the declaration
        style: How the declaration is rendered

    Returns:
        NamespaceEdit with status ALREADY_PATCHED, BLOCK_NOT_FOUND or PATCHED
    """
    if NAMESPACE_KEYWORD in text:
        return NamespaceEdit(status=PatchStatus.ALREADY_PATCHED, text=text)

    descriptor = parse_descriptor(text)
    block = descriptor.find_block(block_name)
    patched = None
    if block is not None:
        patched = insert_declaration(descriptor, block, style.render(namespace))
    if patched is None:
        return NamespaceEdit(status=PatchStatus.BLOCK_NOT_FOUND, text=text)

    return NamespaceEdit(status=PatchStatus.PATCHED, text=patched)
