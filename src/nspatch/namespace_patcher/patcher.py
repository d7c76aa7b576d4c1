"""
Namespace patcher implementation.

Executes patch plans against descriptor files in the package cache.
"""

import logging
import os
from typing import Dict

from nspatch.namespace_patcher.namespace_edit import apply_namespace_patch
from nspatch.nspatch_config import DeclarationStyle
from nspatch.nspatch_exceptions import NspatchException
from nspatch.nspatch_logger import NspatchLogger
from nspatch.nspatch_utils import FileUtils
from nspatch.patch_config.plan_manager import (
    PatchPlan,
    PatchPlanManager,
    PatchStatus,
)


class NamespacePatcher:
    """
    Inserts missing namespace declarations into cached build descriptors.

    Executes patch plans, logs every outcome, and updates patch states.
    """

    def __init__(
        self,
        plan_manager: PatchPlanManager,
        logger: NspatchLogger,
        dry_run: bool = False,
    ):
        """
        Initialize the namespace patcher.

        Args:
            plan_manager: The PatchPlanManager with patch plans
            logger: Logger for progress and error messages
            dry_run: Analyse only, never write
        """
        self.plan_manager = plan_manager
        self.logger = logger
        self.dry_run = dry_run

    def patch_all_pending(self) -> bool:
        """
        Patch all pending targets.

        Returns:
            True if every enabled descriptor declares a namespace afterwards
            (or would, in dry-run mode); False if any was missing or malformed

        Raises:
            NspatchException: On the first I/O failure
        """
        pending = self.plan_manager.get_pending_patches()

        if not pending:
            self.logger.log("No pending patches", logging.INFO)
            return True

        all_patched = True
        for plan in pending:
            status = self.patch_target(plan)
            if status not in (
                PatchStatus.PATCHED,
                PatchStatus.ALREADY_PATCHED,
                PatchStatus.WOULD_PATCH,
            ):
                all_patched = False

        return all_patched

    def patch_target(self, plan: PatchPlan) -> str:
        """
        Patch a single planned target.

        Returns:
            The final PatchStatus value

        Raises:
            NspatchException: If the descriptor cannot be read or written
        """
        try:
            status = self.patch_descriptor(
                plan.descriptor_path,
                plan.target.namespace,
                block_name=plan.target.block,
                style=plan.declaration_style,
                label=plan.target.package,
            )
        except NspatchException as e:
            self.plan_manager.mark_patch_completed(
                plan, PatchStatus.FAILED, error_message=e.message
            )
            raise

        self.plan_manager.mark_patch_completed(plan, status)
        return status

    def patch_descriptor(
        self,
        descriptor_path: str,
        namespace: str,
        block_name: str = "android",
        style: DeclarationStyle = DeclarationStyle.GROOVY,
        label: str = "",
    ) -> str:
        """
        Ensure the descriptor at the given path declares a namespace.

        A missing file is not an error: the package may simply not be cached here.

        Returns:
            The resulting PatchStatus value
        """
        label = label or descriptor_path

        if not os.path.isfile(descriptor_path):
            self.logger.log(
                f"Descriptor for {label} not found at {descriptor_path}, skipping",
                logging.INFO,
            )
            return PatchStatus.TARGET_MISSING

        content = FileUtils.read_file(self.logger, descriptor_path)
        edit = apply_namespace_patch(content, namespace, block_name=block_name, style=style)

        if edit.status == PatchStatus.ALREADY_PATCHED:
            self.logger.log(f"Namespace already declared for {label}", logging.INFO)
            return edit.status

        if edit.status == PatchStatus.BLOCK_NOT_FOUND:
            self.logger.log(
                f"No '{block_name}' block found in {descriptor_path}, left unchanged",
                logging.WARNING,
            )
            return edit.status

        if self.dry_run:
            self.logger.log(
                f"Namespace {namespace} would be added to {label}", logging.INFO
            )
            return PatchStatus.WOULD_PATCH

        FileUtils.write_file(self.logger, descriptor_path, edit.text)
        self.logger.log(f"Namespace added to {label}", logging.INFO)
        return PatchStatus.PATCHED

    def get_summary(self) -> Dict[str, int]:
        """
        Get a summary of patch results.

        Returns:
            Dictionary with a count per status plus the total
        """
        states = self.plan_manager.get_patch_states().values()
        pending = self.plan_manager.get_pending_patches()

        summary = {
            status: sum(1 for state in states if state.status == status)
            for status in (
                PatchStatus.PATCHED,
                PatchStatus.ALREADY_PATCHED,
                PatchStatus.TARGET_MISSING,
                PatchStatus.BLOCK_NOT_FOUND,
                PatchStatus.WOULD_PATCH,
                PatchStatus.FAILED,
            )
        }
        summary[PatchStatus.PENDING] = len(pending)
        summary["total"] = len(states) + len(pending)
        return summary
