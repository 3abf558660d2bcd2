"""Renders extracted binaries into importable Python modules."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Dict, List, Mapping

import black
from jinja2 import Environment, FileSystemLoader, TemplateError

from .errors import GenerationError
from .logging import stage_logger
from .models import ARCHITECTURES

DEFAULT_OUTPUT_DIR = "wintunlib"
TEMPLATE_NAME = "lib_windows.py.j2"

_LOG = stage_logger("generate")


def byteize(data: bytes) -> str:
    """Render every byte as its unsigned decimal value followed by a comma."""
    return "".join(f"{value}," for value in data)


def module_filename(arch: str) -> str:
    return f"lib_windows_{arch}.py"


def create_env(templates_dir: Path | None = None) -> Environment:
    directory = templates_dir or Path(__file__).with_name("templates")
    env = Environment(
        loader=FileSystemLoader(str(directory)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["byteize"] = byteize
    return env


def render_module(
    arch: str,
    binary: bytes,
    *,
    upstream_arch: str | None = None,
    env: Environment | None = None,
) -> str:
    """Return the formatted module source embedding ``binary`` for ``arch``."""
    env = env or create_env()
    try:
        template = env.get_template(TEMPLATE_NAME)
        rendered = template.render(
            arch=arch,
            upstream_arch=upstream_arch or ARCHITECTURES.get(arch, arch),
            binary=binary,
            digest=hashlib.sha256(binary).hexdigest(),
        )
    except TemplateError as exc:
        raise GenerationError(f"unable to execute template: {exc}") from exc

    try:
        return black.format_str(rendered, mode=black.Mode())
    except ValueError as exc:
        # black.InvalidInput: the template no longer renders valid Python.
        raise GenerationError(f"unable to format template output: {exc}") from exc


class SourceGenerator:
    """Writes one ``lib_windows_<arch>.py`` module per architecture."""

    def __init__(
        self,
        output_dir: Path,
        *,
        architectures: Mapping[str, str] = ARCHITECTURES,
        templates_dir: Path | None = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.architectures = architectures
        self._env = create_env(templates_dir)

    def generate(self, arch: str, binary: bytes) -> Path:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise GenerationError(f"unable to create generate dir: {exc}") from exc

        source = render_module(
            arch,
            binary,
            upstream_arch=self.architectures.get(arch),
            env=self._env,
        )
        path = self.output_dir / module_filename(arch)
        try:
            path.write_bytes(source.encode("utf-8"))
        except OSError as exc:
            raise GenerationError(f"unable to write output file {path}: {exc}") from exc
        return path

    def generate_all(self, binaries: Dict[str, bytes]) -> List[Path]:
        """Generate every module in order, stopping at the first failure."""
        written: List[Path] = []
        for arch, binary in binaries.items():
            _LOG.for_arch(arch).info("writing %s", module_filename(arch))
            written.append(self.generate(arch, binary))
        return written


__all__ = [
    "DEFAULT_OUTPUT_DIR",
    "SourceGenerator",
    "byteize",
    "create_env",
    "module_filename",
    "render_module",
]
