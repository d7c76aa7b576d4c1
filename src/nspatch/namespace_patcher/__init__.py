"""
Namespace patcher.

This package handles:
1. Inserting a namespace declaration into descriptor text
2. Reading and overwriting cached descriptor files
3. Updating patch states and summarizing results
"""

from .namespace_edit import NamespaceEdit, apply_namespace_patch
from .patcher import NamespacePatcher

__all__ = ["NamespaceEdit", "NamespacePatcher", "apply_namespace_patch"]
