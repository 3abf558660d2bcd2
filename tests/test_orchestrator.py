"""Tests for wintunembed.orchestrator."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.archive_builder import ArchiveBuilder, sample_binary
from wintunembed.config import EmbedConfig, PublishConfig
from wintunembed.errors import ArchiveError, DownloadError
from wintunembed.git.publisher import Publisher
from wintunembed.models import ARCHITECTURES
from wintunembed.orchestrator import Pipeline


class StaticResolver:
    def __init__(self, version: str) -> None:
        self.version = version

    def identify_latest(self) -> str:
        return self.version


class RecordingFetcher:
    """Test double that serves a fixed archive and records URLs."""

    def __init__(self, payload: bytes) -> None:
        self.payload = payload
        self.urls: list[str] = []

    def fetch(self, url: str) -> bytes:
        self.urls.append(url)
        return self.payload


class GitRecorder:
    """Fake git runner whose status output is controlled by the test."""

    def __init__(self, status: str = "") -> None:
        self.status = status
        self.calls: list[list[str]] = []

    def __call__(self, args, cwd, env=None, capture_output=False):
        args = list(args)
        self.calls.append(args)
        if args[:2] == ["git", "status"]:
            return self.status
        return ""


def _pipeline(root: Path, archive: bytes, git: GitRecorder, **config_kwargs) -> tuple[Pipeline, RecordingFetcher]:
    config = EmbedConfig(root=root, **config_kwargs)
    fetcher = RecordingFetcher(archive)
    pipeline = Pipeline(
        config,
        resolver=StaticResolver("0.14.1"),
        fetcher=fetcher,
        publisher=Publisher(root, runner=git),
    )
    return pipeline, fetcher


def _load(path: Path) -> bytes:
    namespace: dict = {}
    exec(compile(path.read_text(encoding="utf-8"), str(path), "exec"), namespace)
    return namespace["get_binary"]()


def test_first_run_generates_and_publishes(project_root: Path, release_archive: bytes) -> None:
    git = GitRecorder(status="?? wintunlib/\n")
    pipeline, fetcher = _pipeline(project_root, release_archive, git)

    outcome = pipeline.run()

    assert fetcher.urls == ["https://www.wintun.net/builds/wintun-0.14.1.zip"]
    assert outcome.version.normalized == "0.14.1"
    assert sorted(path.name for path in (project_root / "wintunlib").iterdir()) == sorted(
        f"lib_windows_{key}.py" for key in ARCHITECTURES
    )
    contents = {path.name: _load(path) for path in outcome.files}
    assert len(set(contents.values())) == 4
    for key in ARCHITECTURES:
        assert contents[f"lib_windows_{key}.py"] == sample_binary(key)

    assert outcome.changed is True
    assert outcome.published is True
    assert ["git", "tag", "-f", "-a", "v0.14.1", "-m", "Wintun version 0.14.1"] in git.calls
    pushes = [call for call in git.calls if call[:2] == ["git", "push"]]
    assert pushes == [["git", "push", "--follow-tags"], ["git", "push", "origin", "v0.14.1"]]


def test_unchanged_output_skips_publishing(project_root: Path, release_archive: bytes) -> None:
    git = GitRecorder(status="")
    pipeline, _ = _pipeline(project_root, release_archive, git)

    outcome = pipeline.run()

    assert outcome.changed is False
    assert outcome.published is False
    assert git.calls == [["git", "status", "--porcelain=v1"]]


def test_rerun_produces_identical_files(project_root: Path, release_archive: bytes) -> None:
    pipeline, _ = _pipeline(project_root, release_archive, GitRecorder())

    first = {path.name: path.read_bytes() for path in pipeline.run().files}
    second = {path.name: path.read_bytes() for path in pipeline.run().files}

    assert first == second


def test_publishing_can_be_disabled(project_root: Path, release_archive: bytes) -> None:
    git = GitRecorder(status=" M wintunlib/lib_windows_arm.py\n")
    pipeline, _ = _pipeline(
        project_root, release_archive, git, publish=PublishConfig(enabled=False)
    )

    outcome = pipeline.run()

    assert outcome.changed is True
    assert outcome.published is False
    assert not any(call[:2] == ["git", "commit"] for call in git.calls)


def test_missing_architecture_aborts_without_output(project_root: Path) -> None:
    builder = ArchiveBuilder()
    for key, upstream_arch in ARCHITECTURES.items():
        if key != "386":
            builder.add_binary(upstream_arch, sample_binary(key))
    git = GitRecorder(status="?? x\n")
    pipeline, _ = _pipeline(project_root, builder.build(), git)

    with pytest.raises(ArchiveError, match="architecture 386"):
        pipeline.run()

    assert not (project_root / "wintunlib").exists()
    assert git.calls == []


def test_download_failure_is_terminal(project_root: Path) -> None:
    class FailingFetcher:
        def fetch(self, url: str) -> bytes:
            raise DownloadError(f"downloading {url} failed: unreachable")

    git = GitRecorder()
    pipeline = Pipeline(
        EmbedConfig(root=project_root),
        resolver=StaticResolver("0.14.1"),
        fetcher=FailingFetcher(),
        publisher=Publisher(project_root, runner=git),
    )

    with pytest.raises(DownloadError):
        pipeline.run()
    assert git.calls == []
