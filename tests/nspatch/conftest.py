"""
Shared fixtures for nspatch tests.
"""

import pathlib

import pytest

from tests.nspatch.descriptor_samples import FFMPEG_BUILD_GRADLE, FFMPEG_RELATIVE_PATH


@pytest.fixture
def pub_cache(tmp_path) -> pathlib.Path:
    """A package cache directory next to an android/ project directory."""
    cache = tmp_path / ".pub-cache"
    cache.mkdir()
    return cache


@pytest.fixture
def android_dir(tmp_path) -> pathlib.Path:
    project = tmp_path / "android"
    project.mkdir()
    return project


@pytest.fixture
def ffmpeg_descriptor(pub_cache) -> pathlib.Path:
    """The ffmpeg_kit descriptor, unpatched, inside the package cache."""
    path = pub_cache.joinpath(*FFMPEG_RELATIVE_PATH.split("/"))
    path.parent.mkdir(parents=True)
    path.write_text(FFMPEG_BUILD_GRADLE, encoding="utf-8")
    return path
