"""
Runs the namespace patch step: the pre-evaluation hook that fixes cached
plugin descriptors before the build tooling reads them.
"""

import json
import logging
import os
from pathlib import PurePath
from typing import Dict, Mapping, Optional

from nspatch.descriptor_models import PatchTargetsConfig
from nspatch.namespace_patcher import NamespacePatcher
from nspatch.nspatch_config import NspatchConfig
from nspatch.nspatch_logger import NspatchLogger
from nspatch.nspatch_settings import NspatchSettings
from nspatch.patch_config import PatchPlanManager
from nspatch.patch_config.plan_manager import PatchStatus


KNOWN_TARGETS_PATH = str(
    PurePath(os.path.dirname(__file__), "known_targets", "known_targets.json")
)


def load_patch_targets(config: NspatchConfig) -> PatchTargetsConfig:
    """
    Load the known targets and merge the configured custom targets over them.
    """
    with open(KNOWN_TARGETS_PATH, "r") as f:
        known_targets_data = json.load(f)

    targets_config = PatchTargetsConfig(**known_targets_data)
    if config.custom_targets:
        targets_config = targets_config.merge(config.custom_targets)
    return targets_config


def create_plan_manager(
    config: NspatchConfig,
    logger: NspatchLogger,
    environ: Optional[Mapping[str, str]] = None,
) -> PatchPlanManager:
    """
    Resolve the cache directory and plan every enabled target.
    """
    targets_config = load_patch_targets(config)
    cache_directory = NspatchSettings.resolve_cache_directory(logger, config, environ)
    logger.log(
        f"Using package cache {cache_directory} ({config.path_strategy})",
        logging.DEBUG,
    )

    plan_manager = PatchPlanManager(
        targets_config=targets_config,
        nspatch_config=config,
        cache_directory=cache_directory,
    )
    plan_manager.create_patch_plan()
    return plan_manager


def run_patch_step(
    config: NspatchConfig,
    logger: NspatchLogger,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, int]:
    """
    Patch every enabled target and return the summary.

    This method:
    1. Loads known_targets.json into a Pydantic model
    2. Creates a PatchPlanManager to resolve descriptor paths
    3. Creates a NamespacePatcher to execute the plans
    4. Logs and returns the patch summary

    Raises:
        NspatchException: On invalid configuration or an I/O failure
    """
    plan_manager = create_plan_manager(config, logger, environ)

    patcher = NamespacePatcher(plan_manager, logger, dry_run=config.dry_run)
    patcher.patch_all_pending()

    summary = patcher.get_summary()
    counts = [f"{summary[PatchStatus.PATCHED]} patched"]
    if config.dry_run:
        counts.append(f"{summary[PatchStatus.WOULD_PATCH]} would patch")
    counts += [
        f"{summary[PatchStatus.ALREADY_PATCHED]} already patched",
        f"{summary[PatchStatus.TARGET_MISSING]} missing",
        f"{summary[PatchStatus.BLOCK_NOT_FOUND]} block not found",
        f"{summary[PatchStatus.FAILED]} failed",
    ]
    logger.log(f"Patch summary: {', '.join(counts)}", logging.INFO)
    return summary
