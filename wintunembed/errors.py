"""Exception hierarchy for pipeline stages."""

from __future__ import annotations

from typing import Sequence


class WintunEmbedError(RuntimeError):
    """Base class for every failure that aborts a pipeline run."""


class DiscoveryError(WintunEmbedError):
    """Raised when the latest upstream release cannot be identified."""


class VersionError(WintunEmbedError):
    """Raised when a release tag cannot be normalized."""


class DownloadError(WintunEmbedError):
    """Raised when the release archive cannot be retrieved."""


class ArchiveError(WintunEmbedError):
    """Raised when the release archive is unreadable or lacks a binary."""


class GenerationError(WintunEmbedError):
    """Raised when a module cannot be rendered, formatted or written."""


class PublishError(WintunEmbedError):
    """Raised when a git operation fails while publishing."""


class CommandError(WintunEmbedError):
    """A subprocess exited with a non-zero status."""

    def __init__(self, args: Sequence[str], returncode: int, output: str) -> None:
        self.command = list(args)
        self.returncode = returncode
        self.output = output
        super().__init__(f"exit code {returncode}: {output.strip()}")


__all__ = [
    "ArchiveError",
    "CommandError",
    "DiscoveryError",
    "DownloadError",
    "GenerationError",
    "PublishError",
    "VersionError",
    "WintunEmbedError",
]
