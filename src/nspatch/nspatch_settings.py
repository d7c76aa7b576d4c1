"""
Defines where nspatch looks for the pub package cache.
"""

import logging
import os
import pathlib
from typing import Mapping, Optional

from nspatch.nspatch_config import NspatchConfig, PathStrategy
from nspatch.nspatch_exceptions import NspatchException
from nspatch.nspatch_logger import NspatchLogger
from nspatch.nspatch_utils import PlatformUtils, PropertiesUtils


PUB_CACHE_DIR_NAME = ".pub-cache"


class NspatchSettings:
    """
    Provides the various package cache locations used to build descriptor paths.
    """

    @staticmethod
    def get_user_pub_cache_directory(environ: Optional[Mapping[str, str]] = None) -> str:
        """
        Returns the per-user pub cache: $PUB_CACHE, else the platform default.
        """
        environ = os.environ if environ is None else environ
        if environ.get("PUB_CACHE"):
            return environ["PUB_CACHE"]

        if PlatformUtils.is_windows() and environ.get("LOCALAPPDATA"):
            return str(pathlib.PurePath(environ["LOCALAPPDATA"], "Pub", "Cache"))

        home = environ.get("HOME") or str(pathlib.Path.home())
        return str(pathlib.PurePath(home, PUB_CACHE_DIR_NAME))

    @staticmethod
    def get_repository_pub_cache_directory(project_root: str) -> str:
        """
        Returns the pub cache that sits next to the project root.
        """
        return os.path.normpath(
            os.path.join(os.path.abspath(project_root), "..", PUB_CACHE_DIR_NAME)
        )

    @staticmethod
    def get_sdk_pub_cache_directory(logger: NspatchLogger, config: NspatchConfig) -> str:
        """
        Returns the pub cache inside the SDK declared by the project's local.properties.
        """
        properties_path = os.path.join(config.project_root, config.sdk_properties_file)
        missing = NspatchException(
            f"{config.sdk_property_key} not set in {config.sdk_properties_file}"
        )
        if not os.path.isfile(properties_path):
            logger.log(f"Properties file not found: {properties_path}", logging.ERROR)
            raise missing

        sdk_path = PropertiesUtils.read(logger, properties_path).get(config.sdk_property_key)
        if not sdk_path:
            raise missing

        return str(pathlib.PurePath(sdk_path, PUB_CACHE_DIR_NAME))

    @staticmethod
    def resolve_cache_directory(
        logger: NspatchLogger,
        config: NspatchConfig,
        environ: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Resolves the base cache directory for the configured strategy.

        An explicit pub_cache_dir in the configuration always wins.
        """
        if config.pub_cache_dir:
            return config.pub_cache_dir

        if config.path_strategy == PathStrategy.USER_HOME:
            return NspatchSettings.get_user_pub_cache_directory(environ)

        if config.path_strategy == PathStrategy.SDK_PROPERTIES:
            return NspatchSettings.get_sdk_pub_cache_directory(logger, config)

        return NspatchSettings.get_repository_pub_cache_directory(config.project_root)
