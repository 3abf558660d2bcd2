"""Configuration loading for wintunembed (.wintunembed.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import WintunEmbedError
from .fetch import DEFAULT_URL_TEMPLATE
from .generator import DEFAULT_OUTPUT_DIR
from .git.upstream import DEFAULT_GIT_REPO, DEFAULT_SCRATCH_DIR
from .models import ARCHITECTURES, freeze_architectures

CONFIG_FILENAME = ".wintunembed.yml"
ENV_VERBOSE = "WINTUNEMBED_VERBOSE"


class ConfigError(WintunEmbedError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class UpstreamConfig:
    """Where release tags are discovered."""

    git_repo: str = DEFAULT_GIT_REPO
    scratch_dir: str = DEFAULT_SCRATCH_DIR


@dataclass
class DownloadConfig:
    """Release archive retrieval settings."""

    url_template: str = DEFAULT_URL_TEMPLATE
    timeout: Optional[float] = None


@dataclass
class PublishConfig:
    """Publish strategy for regenerated modules."""

    enabled: bool = True
    remote: str = "origin"


@dataclass
class LoggingConfig:
    """Console verbosity and optional log file."""

    verbose: bool = False
    log_file: Optional[Path] = None


@dataclass
class EmbedConfig:
    """Represents the settings defined in .wintunembed.yml."""

    root: Path
    upstream: UpstreamConfig = field(default_factory=UpstreamConfig)
    download: DownloadConfig = field(default_factory=DownloadConfig)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    architectures: Mapping[str, str] = field(default_factory=lambda: ARCHITECTURES)
    publish: PublishConfig = field(default_factory=PublishConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def scratch_path(self) -> Path:
        return self.root / self.upstream.scratch_dir

    @property
    def output_path(self) -> Path:
        return self.root / self.output_dir


def load_config(project_dir: Path) -> EmbedConfig:
    """Load ``.wintunembed.yml`` from ``project_dir``, falling back to defaults when absent."""
    root = project_dir.expanduser().resolve()
    config_file = root / CONFIG_FILENAME

    if not config_file.exists():
        config = EmbedConfig(root=root)
    else:
        data = _read_config(config_file)
        if not isinstance(data, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
        config = _build_config(root, data)

    if _as_bool(os.getenv(ENV_VERBOSE)):
        config.logging.verbose = True
    return config


def _build_config(root: Path, data: Dict[str, Any]) -> EmbedConfig:
    config = EmbedConfig(root=root)

    upstream_data = _as_dict(data.get("upstream"))
    config.upstream = UpstreamConfig(
        git_repo=_as_str(upstream_data.get("git_repo")) or DEFAULT_GIT_REPO,
        scratch_dir=_as_str(upstream_data.get("scratch_dir")) or DEFAULT_SCRATCH_DIR,
    )

    download_data = _as_dict(data.get("download"))
    url_template = _as_str(download_data.get("url_template")) or DEFAULT_URL_TEMPLATE
    if "{version}" not in url_template:
        raise ConfigError("download.url_template must contain a {version} placeholder")
    config.download = DownloadConfig(
        url_template=url_template,
        timeout=_as_float(download_data.get("timeout")),
    )

    output_data = _as_dict(data.get("output"))
    output_dir = _as_str(output_data.get("dir"))
    if output_dir:
        config.output_dir = Path(output_dir)

    if "architectures" in data:
        arch_data = _as_dict(data.get("architectures"))
        if not arch_data:
            raise ConfigError("architectures must be a non-empty mapping")
        config.architectures = freeze_architectures(arch_data)

    publish_data = _as_dict(data.get("publish"))
    enabled = _as_bool(publish_data.get("enabled"))
    config.publish = PublishConfig(
        enabled=True if enabled is None else enabled,
        remote=_as_str(publish_data.get("remote")) or "origin",
    )

    logging_data = _as_dict(data.get("logging"))
    log_file = _as_str(logging_data.get("log_file"))
    config.logging = LoggingConfig(
        verbose=_as_bool(logging_data.get("verbose")) or False,
        log_file=root / log_file if log_file else None,
    )
    return config


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DownloadConfig",
    "EmbedConfig",
    "LoggingConfig",
    "PublishConfig",
    "UpstreamConfig",
    "load_config",
]
