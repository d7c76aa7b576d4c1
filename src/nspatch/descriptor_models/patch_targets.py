"""
Pydantic data models for known_targets.json.

Each target names one cached pub package whose Android build descriptor is
missing the namespace declaration required by newer Android Gradle Plugin
versions.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from nspatch.nspatch_exceptions import NspatchException


class PatchTarget(BaseModel):
    """
    A cached package descriptor that needs a namespace declaration.
    """

    package: str = Field(..., description="Pub package name")
    version: str = Field(..., description="Package version")
    namespace: str = Field(..., description="Android namespace to declare")
    host: str = Field("pub.dev", description="Hosted repository directory in the pub cache")
    descriptor: str = Field(
        "android/build.gradle", description="Descriptor path relative to the package directory"
    )
    block: str = Field("android", description="Block that receives the declaration")
    description: Optional[str] = Field(None, alias="_description")

    class Config:
        extra = "allow"
        populate_by_name = True

    @property
    def relative_path(self) -> str:
        """Path of the descriptor relative to the cache directory."""
        return "/".join(
            ["hosted", self.host, f"{self.package}-{self.version}", self.descriptor]
        )


class PatchTargetsConfig(BaseModel):
    """
    Top-level model of known_targets.json.

    Structure:
    {
      "_description": "...",
      "targets": {
        "target_key": PatchTarget,
        ...
      }
    }
    """

    description: Optional[str] = Field(None, alias="_description")
    targets: Dict[str, PatchTarget] = Field(default_factory=dict)

    class Config:
        extra = "allow"
        populate_by_name = True

    def get_targets(self) -> Dict[str, PatchTarget]:
        return self.targets

    def get_target(self, key: str) -> Optional[PatchTarget]:
        return self.targets.get(key)

    def merge(self, custom_targets: Dict[str, Dict]) -> "PatchTargetsConfig":
        """
        Return a new config with the given raw targets added; same keys replace known ones.

        Raises:
            NspatchException: If a raw target is not a valid PatchTarget
        """
        merged = dict(self.targets)
        for key, raw in custom_targets.items():
            try:
                merged[key] = PatchTarget(**raw)
            except ValidationError as e:
                raise NspatchException(f"Invalid custom target {key}: {e}") from e
        return PatchTargetsConfig(_description=self.description, targets=merged)
