"""
Descriptor models.

This package provides Pydantic data models for parsed build descriptors and
for the table of packages whose descriptors need patching.
"""

from .build_descriptor import (
    BuildDescriptor,
    Block,
    Declaration,
    DEFAULT_INDENT,
)
from .patch_targets import (
    PatchTarget,
    PatchTargetsConfig,
)

__all__ = [
    # Build descriptor
    "BuildDescriptor",
    "Block",
    "Declaration",
    "DEFAULT_INDENT",
    # Patch targets
    "PatchTarget",
    "PatchTargetsConfig",
]
