"""Pipeline orchestration: resolve, fetch, extract, generate, publish."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Protocol

from .archive import extract_binaries
from .config import EmbedConfig
from .fetch import Fetcher, build_url
from .generator import SourceGenerator
from .git.publisher import Publisher
from .git.upstream import UpstreamResolver
from .logging import stage_logger
from .models import Version
from .version import VersionSource, resolve_version

Extractor = Callable[..., Dict[str, bytes]]


class ArchiveSource(Protocol):
    def fetch(self, url: str) -> bytes: ...


@dataclass
class RunOutcome:
    """Result of a pipeline run."""

    version: Version
    files: List[Path]
    changed: bool
    published: bool


class Pipeline:
    """Runs one regeneration pass end to end.

    Every stage runs to completion before the next starts and any failure
    propagates unchanged; there is no partial-success mode.
    """

    def __init__(
        self,
        config: EmbedConfig,
        *,
        resolver: VersionSource | None = None,
        fetcher: ArchiveSource | None = None,
        extractor: Extractor | None = None,
        generator: SourceGenerator | None = None,
        publisher: Publisher | None = None,
    ) -> None:
        self.config = config
        self.resolver = resolver or UpstreamResolver(
            config.scratch_path, git_repo=config.upstream.git_repo
        )
        self.fetcher = fetcher or Fetcher(timeout=config.download.timeout)
        self.extractor = extractor or extract_binaries
        self.generator = generator or SourceGenerator(
            config.output_path, architectures=config.architectures
        )
        self.publisher = publisher or Publisher(config.root, remote=config.publish.remote)

    @property
    def architectures(self) -> Mapping[str, str]:
        return self.config.architectures

    def run(self) -> RunOutcome:
        resolve_log = stage_logger("resolve")
        resolve_log.info("identifying latest Wintun version...")
        version = resolve_version(self.resolver)
        resolve_log.info("found ver %s (normalized %s)", version.raw, version.normalized)

        url = build_url(version.raw, self.config.download.url_template)
        stage_logger("fetch").info("downloading %s", url)
        archive = self.fetcher.fetch(url)

        stage_logger("extract").info("unzipping %d binaries", len(self.architectures))
        binaries = self.extractor(archive, len(archive), self.architectures)

        stage_logger("generate").info("generating source files...")
        files = self.generator.generate_all(binaries)

        changed = self.publisher.has_changes()
        published = self._maybe_publish(version, changed)
        stage_logger("pipeline").info("done!")
        return RunOutcome(version=version, files=files, changed=changed, published=published)

    def _maybe_publish(self, version: Version, changed: bool) -> bool:
        log = stage_logger("publish")
        if not changed:
            log.info("no changes detected, nothing to publish")
            return False
        if not self.config.publish.enabled:
            log.info("changes detected, publishing disabled by configuration")
            return False
        log.info("changes detected, pushing...")
        self.publisher.publish(version)
        return True


__all__ = ["Pipeline", "RunOutcome"]
