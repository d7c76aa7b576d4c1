"""
This file exposes the main entry points of nspatch.
"""

from nspatch.nspatch_config import DeclarationStyle, NspatchConfig, PathStrategy
from nspatch.nspatch_exceptions import NspatchException
from nspatch.nspatch_logger import NspatchLogger
from nspatch.namespace_patcher import NamespacePatcher, apply_namespace_patch
from nspatch.patch_step import run_patch_step

__all__ = [
    "DeclarationStyle",
    "NamespacePatcher",
    "NspatchConfig",
    "NspatchException",
    "NspatchLogger",
    "PathStrategy",
    "apply_namespace_patch",
    "run_patch_step",
]
