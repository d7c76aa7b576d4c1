"""
Configuration parameters for nspatch.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

try:
    import tomllib
except ModuleNotFoundError:
    # Python < 3.11
    import tomli as tomllib

from nspatch.nspatch_exceptions import NspatchException


CONFIG_FILE_NAME = "nspatch.toml"


class PathStrategy(str, Enum):
    """
    How the base package cache directory is located.
    """

    REPOSITORY_RELATIVE = "repository_relative"
    USER_HOME = "user_home"
    SDK_PROPERTIES = "sdk_properties"

    def __str__(self) -> str:
        return self.value


class DeclarationStyle(str, Enum):
    """
    How the inserted namespace declaration is written.
    """

    GROOVY = "groovy"
    GROOVY_SINGLE_QUOTED = "groovy_single_quoted"
    KOTLIN = "kotlin"

    def __str__(self) -> str:
        return self.value

    def render(self, namespace: str) -> str:
        """Render the declaration line (without indentation) for the given namespace."""
        if self == DeclarationStyle.GROOVY_SINGLE_QUOTED:
            return f"namespace '{namespace}'"
        if self == DeclarationStyle.KOTLIN:
            return f'namespace = "{namespace}"'
        return f'namespace "{namespace}"'


def _parse_enum(enum_cls, value: Any, field_name: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise NspatchException(
            f"Unsupported {field_name}: {value} (expected one of: {choices})"
        )


@dataclass
class NspatchConfig:
    """
    Configuration parameters
    """

    project_root: str = "."
    path_strategy: PathStrategy = PathStrategy.REPOSITORY_RELATIVE
    declaration_style: DeclarationStyle = DeclarationStyle.GROOVY
    pub_cache_dir: Optional[str] = None
    sdk_properties_file: str = "local.properties"
    sdk_property_key: str = "flutter.sdk"
    enabled_targets: List[str] = field(default_factory=list)
    custom_targets: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    dry_run: bool = False

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "NspatchConfig":
        """
        Create a NspatchConfig instance from a dictionary

        Raises:
            NspatchException: If configuration is invalid
        """
        enabled_targets = env.get("enabled_targets", [])
        if not isinstance(enabled_targets, list):
            raise NspatchException("'enabled_targets' must be a list")

        custom_targets = env.get("custom_targets", {})
        if not isinstance(custom_targets, dict) or not all(
            isinstance(v, dict) for v in custom_targets.values()
        ):
            raise NspatchException("'custom_targets' must be a table of tables")

        for key in ("project_root", "sdk_properties_file", "sdk_property_key"):
            if not isinstance(env.get(key, ""), str):
                raise NspatchException(f"'{key}' must be a string")
        if not isinstance(env.get("pub_cache_dir"), (str, type(None))):
            raise NspatchException("'pub_cache_dir' must be a string")
        if not isinstance(env.get("dry_run", False), bool):
            raise NspatchException("'dry_run' must be a boolean")

        return cls(
            project_root=env.get("project_root", "."),
            path_strategy=_parse_enum(
                PathStrategy,
                env.get("path_strategy", PathStrategy.REPOSITORY_RELATIVE),
                "path_strategy",
            ),
            declaration_style=_parse_enum(
                DeclarationStyle,
                env.get("declaration_style", DeclarationStyle.GROOVY),
                "declaration_style",
            ),
            pub_cache_dir=env.get("pub_cache_dir"),
            sdk_properties_file=env.get("sdk_properties_file", "local.properties"),
            sdk_property_key=env.get("sdk_property_key", "flutter.sdk"),
            enabled_targets=[str(t) for t in enabled_targets],
            custom_targets=dict(custom_targets),
            dry_run=env.get("dry_run", False),
        )

    @classmethod
    def from_toml(cls, path: str, project_root: Optional[str] = None) -> "NspatchConfig":
        """
        Load the [nspatch] table of a TOML file.

        A relative project_root in the file is resolved against the file's directory.
        """
        try:
            with open(path, "rb") as f:
                toml_dict = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise NspatchException(f"Invalid TOML in {path}: {e}") from e
        except OSError as e:
            raise NspatchException(f"Cannot read config file {path}: {e}") from e

        section = dict(toml_dict.get("nspatch", {}))
        if project_root is not None:
            section["project_root"] = project_root
        elif "project_root" not in section:
            section["project_root"] = os.path.dirname(os.path.abspath(path))
        elif isinstance(section["project_root"], str):
            section["project_root"] = os.path.join(
                os.path.dirname(os.path.abspath(path)), section["project_root"]
            )

        return cls.from_dict(section)
