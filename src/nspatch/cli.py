"""
Command line entry point for nspatch.

Usage from a Flutter project's android/ directory, before Gradle configures
the build:

    nspatch                      # patch every enabled target
    nspatch check                # report what would change, write nothing
    nspatch targets              # list targets and their descriptor paths

Configuration is read from nspatch.toml in the project root when present;
command line flags override it.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from nspatch.nspatch_config import (
    CONFIG_FILE_NAME,
    DeclarationStyle,
    NspatchConfig,
    PathStrategy,
)
from nspatch.nspatch_exceptions import NspatchException
from nspatch.nspatch_logger import NspatchLogger
from nspatch.patch_step import create_plan_manager, run_patch_step


CONFIG_TOML_SCHEMA = """
# nspatch configuration

[nspatch]
# Where the pub package cache is found:
#   "repository_relative" -> <project_root>/../.pub-cache (default)
#   "user_home"           -> $PUB_CACHE or ~/.pub-cache
#   "sdk_properties"      -> <flutter.sdk from local.properties>/.pub-cache
path_strategy = "repository_relative"

# "groovy" -> namespace "x", "groovy_single_quoted" -> namespace 'x', "kotlin" -> namespace = "x"
declaration_style = "groovy"

# Explicit cache directory, overrides path_strategy (optional)
# pub_cache_dir = "/path/to/.pub-cache"

# Targets to patch; empty means every known target
# enabled_targets = ["ffmpeg_kit_flutter_min_gpl"]

# Extra targets (optional)
# [nspatch.custom_targets.my_plugin]
# package = "my_plugin"
# version = "1.2.3"
# namespace = "com.example.my_plugin"
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nspatch",
        description="Insert missing Android namespace declarations into cached plugin build descriptors.",
        epilog=CONFIG_TOML_SCHEMA,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--project-root", default=None, help="Android project directory (default: cwd).")
    parser.add_argument("--config", default=None, help=f"Config file (default: <project-root>/{CONFIG_FILE_NAME}).")
    parser.add_argument("--strategy", choices=[s.value for s in PathStrategy], default=None)
    parser.add_argument("--style", choices=[s.value for s in DeclarationStyle], default=None)
    parser.add_argument("--pub-cache", default=None, help="Explicit package cache directory.")
    parser.add_argument(
        "--target",
        action="append",
        default=None,
        help="Target key to patch; repeatable (default: all known targets).",
    )
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-format", default="text", choices=["text", "json"])

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("patch", help="Patch every enabled target (default).")
    subparsers.add_parser("check", help="Report what would change without writing.")
    subparsers.add_parser("targets", help="List enabled targets and their descriptor paths.")
    return parser


def load_config(args: argparse.Namespace) -> NspatchConfig:
    """
    Build the configuration from the config file (if any) and the command line flags.
    """
    project_root = args.project_root or os.getcwd()
    config_path = args.config or os.path.join(project_root, CONFIG_FILE_NAME)

    if args.config or os.path.exists(config_path):
        if not os.path.exists(config_path):
            raise NspatchException(f"Config file not found: {config_path}")
        config = NspatchConfig.from_toml(config_path, project_root=args.project_root)
    else:
        config = NspatchConfig(project_root=project_root)

    if args.strategy:
        config.path_strategy = PathStrategy(args.strategy)
    if args.style:
        config.declaration_style = DeclarationStyle(args.style)
    if args.pub_cache:
        config.pub_cache_dir = args.pub_cache
    if args.target:
        config.enabled_targets = list(args.target)
    if args.command == "check":
        config.dry_run = True

    return config


def list_targets(config: NspatchConfig, logger: NspatchLogger) -> None:
    plan_manager = create_plan_manager(config, logger)
    for key, plan in plan_manager.get_patch_plans().items():
        present = "present" if os.path.isfile(plan.descriptor_path) else "missing"
        print(f"{key}\t{plan.target.namespace}\t{plan.descriptor_path}\t{present}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = getattr(logging, args.log_level)
    logging.basicConfig(level=level, format="%(levelname)s | %(name)s | %(message)s")
    logger = NspatchLogger(json_output=args.log_format == "json", level=level)

    try:
        config = load_config(args)
        if args.command == "targets":
            list_targets(config, logger)
        else:
            run_patch_step(config, logger)
    except NspatchException as e:
        logger.log(f"nspatch failed: {e.message}", logging.ERROR)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
