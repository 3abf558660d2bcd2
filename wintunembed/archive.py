"""Extraction of per-architecture binaries from a release archive."""

from __future__ import annotations

import io
import zipfile
import zlib
from typing import Dict, Mapping, Optional

from .errors import ArchiveError
from .models import ARCHITECTURES

ENTRY_TEMPLATE = "wintun/bin/{arch}/wintun.dll"


def entry_name(upstream_arch: str) -> str:
    return ENTRY_TEMPLATE.format(arch=upstream_arch)


def extract_binaries(
    archive: bytes,
    length: Optional[int] = None,
    architectures: Mapping[str, str] = ARCHITECTURES,
) -> Dict[str, bytes]:
    """Return ``{architecture key: dll bytes}`` for every configured architecture.

    The batch is all-or-nothing: the first architecture that cannot be resolved
    raises :class:`ArchiveError` and no partial result is returned.
    """
    if length is not None and length != len(archive):
        raise ArchiveError(
            f"archive is truncated: expected {length} bytes, got {len(archive)}"
        )
    try:
        reader = zipfile.ZipFile(io.BytesIO(archive))
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"unable to create zip reader: {exc}") from exc

    binaries: Dict[str, bytes] = {}
    with reader:
        index = {info.filename: info for info in reader.infolist()}
        for key, upstream_arch in architectures.items():
            info = index.get(entry_name(upstream_arch))
            if info is None:
                raise ArchiveError(
                    f"unable to open binary for architecture {key}: "
                    f"{entry_name(upstream_arch)} not found"
                )
            try:
                with reader.open(info) as handle:
                    data = handle.read()
            except (zipfile.BadZipFile, zlib.error, EOFError, OSError, RuntimeError) as exc:
                raise ArchiveError(f"unable to read binary for architecture {key}: {exc}") from exc
            if not data:
                raise ArchiveError(f"binary for architecture {key} is empty")
            binaries[key] = data
    return binaries


__all__ = ["ENTRY_TEMPLATE", "entry_name", "extract_binaries"]
