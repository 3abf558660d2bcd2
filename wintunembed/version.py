"""Release version normalization."""

from __future__ import annotations

from typing import Protocol

from .errors import VersionError
from .models import Version

_COMPONENTS = 3


class VersionSource(Protocol):
    def identify_latest(self) -> str: ...


def normalize_version(raw: str) -> str:
    """Reshape a release tag into exactly three dot-separated components.

    Missing trailing components are padded with ``0``. Anything past the third
    component is folded into it with underscores, so ``1.2.3.4`` becomes
    ``1.2.3_4``.
    """
    trimmed = raw.strip()
    if not trimmed:
        raise VersionError(f"invalid version '{trimmed}'")
    parts = trimmed.split(".", _COMPONENTS - 1)
    parts.extend(["0"] * (_COMPONENTS - len(parts)))
    major, minor, patch = parts
    return f"{major}.{minor}.{patch.replace('.', '_')}"


def resolve_version(source: VersionSource) -> Version:
    """Discover the latest release from ``source`` and normalize it."""
    raw = source.identify_latest()
    return Version(raw=raw, normalized=normalize_version(raw))


__all__ = ["VersionSource", "normalize_version", "resolve_version"]
