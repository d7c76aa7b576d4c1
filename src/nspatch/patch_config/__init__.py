"""
Patch target configuration management.

This package handles:
1. Resolving enabled targets from the known target table and configuration
2. Computing the descriptor path of each target inside the package cache
3. Tracking the status of every planned patch
"""

from .plan_manager import PatchPlanManager

__all__ = ["PatchPlanManager"]
