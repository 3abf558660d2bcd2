from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.archive_builder import ArchiveBuilder


@pytest.fixture
def archive_builder() -> ArchiveBuilder:
    """Provide a fresh archive builder per test."""
    return ArchiveBuilder()


@pytest.fixture
def release_archive(archive_builder: ArchiveBuilder) -> bytes:
    """A well-formed release archive with one dll per architecture."""
    return archive_builder.with_release().build()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root
