"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from tsproject.descriptor.cache import DescriptorCache
from tsproject.models import TrimContext
from tsproject.project import ProjectFile
from tsproject.session import WriteSession


@pytest.fixture
def trim_context() -> TrimContext:
    """Return the context of an untrimmed 1000 frame capture."""
    return TrimContext(
        in_frame=0,
        out_frame=-1,
        total_frames=1000,
        frame_count=1000,
        blank_length=0,
        file_size=123456,
        movie_path="/uncut.ts",
        mount_root=Path("/mnt"),
    )


@pytest.fixture
def cache() -> DescriptorCache:
    return DescriptorCache()


@pytest.fixture
def session(cache: DescriptorCache) -> WriteSession:
    return WriteSession(cache)


@pytest.fixture
def project_file() -> ProjectFile:
    return ProjectFile()


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Create a directory holding a valid tsproject.yaml."""
    config = {
        "mount_root": "/srv/capture",
        "project_path": "/project.kdenlive",
        "movie_path": "/uncut.ts",
        "max_blank_frames": 45000,
    }
    with open(tmp_path / "tsproject.yaml", "w") as f:
        yaml.dump(config, f)
    return tmp_path


def make_project(
    entry: str = '<entry in="50" out="300" producer="1"/>',
    blank: str | None = None,
    playlist_id: str = "playlist5",
) -> bytes:
    """Build a minimal saved project around one playlist5 entry."""
    parts = [
        "<?xml version='1.0' encoding='utf-8'?>",
        '<mlt title="Anonymous Submission">',
        '<playlist id="playlist4"/>',
        f'<playlist id="{playlist_id}">',
    ]
    if blank is not None:
        parts.append(blank)
    parts.extend([entry, "</playlist>", "</mlt>"])
    return "".join(parts).encode("utf-8")


@pytest.fixture
def saved_project() -> bytes:
    return make_project()


@pytest.fixture
def project_factory():
    """Return the saved-project builder."""
    return make_project
