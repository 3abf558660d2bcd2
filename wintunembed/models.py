"""Core data models shared across wintunembed components."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

# Local architecture key -> directory name used inside the upstream archive.
ARCHITECTURES: Mapping[str, str] = MappingProxyType(
    {
        "amd64": "amd64",
        "arm": "arm",
        "arm64": "arm64",
        "386": "x86",
    }
)


@dataclass(frozen=True)
class Version:
    """An upstream release as discovered and in its three-part form."""

    raw: str
    normalized: str

    @property
    def tag(self) -> str:
        return f"v{self.normalized}"


def freeze_architectures(mapping: Mapping[str, str]) -> Mapping[str, str]:
    """Return a read-only copy of an architecture table."""
    return MappingProxyType({str(key): str(value) for key, value in mapping.items()})


__all__ = ["ARCHITECTURES", "Version", "freeze_architectures"]
