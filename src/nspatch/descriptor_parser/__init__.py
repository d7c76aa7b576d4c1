"""
Gradle build descriptor parsing.

This package turns build.gradle / build.gradle.kts text into the block tree
defined in nspatch.descriptor_models.
"""

from .parser import DescriptorParser, parse_descriptor

__all__ = ["DescriptorParser", "parse_descriptor"]
