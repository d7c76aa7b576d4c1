"""
Patch plan manager.

Decides which known targets are patched and where their descriptors live,
and records the outcome of every planned patch.
"""

import pathlib
from typing import Dict, List, Optional

from nspatch.descriptor_models import PatchTarget, PatchTargetsConfig
from nspatch.nspatch_config import DeclarationStyle, NspatchConfig
from nspatch.nspatch_exceptions import NspatchException


class PatchStatus:
    """Enumeration of patch statuses."""

    PENDING = "pending"
    PATCHED = "patched"
    ALREADY_PATCHED = "already_patched"
    TARGET_MISSING = "target_missing"
    BLOCK_NOT_FOUND = "block_not_found"
    WOULD_PATCH = "would_patch"
    FAILED = "failed"


class PatchPlan:
    """
    A plan to patch a specific target descriptor.
    """

    def __init__(
            self,
            target_key: str,
            target: PatchTarget,
            descriptor_path: str,
            declaration_style: DeclarationStyle,
            status: str = PatchStatus.PENDING,
    ):
        """
        Initialize a patch plan.

        Args:
            target_key: Unique key for the target
            target: The PatchTarget object
            descriptor_path: Absolute path of the descriptor to patch
            declaration_style: How the namespace declaration is rendered
            status: Current patch status
        """
        self.target_key = target_key
        self.target = target
        self.descriptor_path = descriptor_path
        self.declaration_style = declaration_style
        self.status = status
        self.error_message: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"PatchPlan(key={self.target_key}, "
            f"status={self.status}, path={self.descriptor_path})"
        )


class PatchState:
    """
    Recorded outcome for a target.
    """

    def __init__(
            self,
            target_key: str,
            status: str,
            descriptor_path: str,
            error_message: Optional[str] = None,
    ):
        self.target_key = target_key
        self.status = status
        self.descriptor_path = descriptor_path
        self.error_message = error_message

    def is_patched(self) -> bool:
        """Check if the descriptor now declares a namespace."""
        return self.status in (PatchStatus.PATCHED, PatchStatus.ALREADY_PATCHED)

    def __repr__(self) -> str:
        return (
            f"PatchState(key={self.target_key}, "
            f"status={self.status}, path={self.descriptor_path})"
        )


class PatchPlanManager:
    """
    Manages patch target configuration and patch decisions.

    Resolves the enabled targets against the known target table and computes
    where each descriptor lives inside the package cache.
    """

    def __init__(
        self,
        targets_config: PatchTargetsConfig,
        nspatch_config: NspatchConfig,
        cache_directory: str,
    ):
        """
        Initialize the patch plan manager.

        Args:
            targets_config: Known targets merged with configured custom targets
            nspatch_config: nspatch configuration
            cache_directory: Resolved base package cache directory
        """
        self.targets = targets_config
        self.nspatch_config = nspatch_config
        self.cache_directory = cache_directory
        self.patch_plans: Dict[str, PatchPlan] = {}
        self.patch_states: Dict[str, PatchState] = {}

    def create_patch_plan(self) -> None:
        """
        Create one pending patch plan per enabled target.

        Raises:
            NspatchException: If an enabled target is not known
        """
        self.patch_plans = {}
        all_targets = self.targets.get_targets()

        for key in self.nspatch_config.enabled_targets:
            if key not in all_targets:
                known = ", ".join(sorted(all_targets)) or "none"
                raise NspatchException(f"Unknown patch target: {key} (known: {known})")

        for key, target in all_targets.items():
            if not self._should_patch_target(key):
                continue
            self.patch_plans[key] = PatchPlan(
                target_key=key,
                target=target,
                descriptor_path=self.get_descriptor_path(target),
                declaration_style=self.nspatch_config.declaration_style,
            )

    def _should_patch_target(self, key: str) -> bool:
        enabled = self.nspatch_config.enabled_targets
        return not enabled or key in enabled

    def get_descriptor_path(self, target: PatchTarget) -> str:
        """
        Absolute path where the target's descriptor is expected.
        """
        return str(pathlib.Path(self.cache_directory, *target.relative_path.split("/")))

    def get_patch_plans(self) -> Dict[str, PatchPlan]:
        return self.patch_plans

    def get_pending_patches(self) -> List[PatchPlan]:
        """
        Get all pending patches.

        Returns:
            List of PatchPlan objects with PENDING status
        """
        return [p for p in self.patch_plans.values() if p.status == PatchStatus.PENDING]

    def mark_patch_completed(
        self, plan: PatchPlan, status: str, error_message: Optional[str] = None
    ) -> None:
        """
        Record the final status of a patch plan.

        Args:
            plan: The patch plan to mark
            status: Final PatchStatus value
            error_message: Error message if the patch failed
        """
        plan.status = status
        plan.error_message = error_message
        self.patch_states[plan.target_key] = PatchState(
            target_key=plan.target_key,
            status=status,
            descriptor_path=plan.descriptor_path,
            error_message=error_message,
        )

    def get_patch_states(self) -> Dict[str, PatchState]:
        return self.patch_states

    def get_patch_state(self, target_key: str) -> Optional[PatchState]:
        return self.patch_states.get(target_key)
