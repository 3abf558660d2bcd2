"""Stage-tagged logging for pipeline runs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, MutableMapping

_LOGGER_NAME = "wintunembed"
_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
_FORMAT = "%(asctime)s %(levelname)s %(message)s"


class StageLogger(logging.LoggerAdapter):
    """Prefixes messages with the pipeline stage and, when set, the architecture."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = self.extra or {}
        stage = extra.get("stage")
        arch = extra.get("arch")
        if stage and arch:
            return f"[{stage}:{arch}] {msg}", kwargs
        if stage:
            return f"[{stage}] {msg}", kwargs
        return msg, kwargs

    def for_arch(self, arch: str) -> "StageLogger":
        extra = dict(self.extra or {})
        extra["arch"] = arch
        return StageLogger(self.logger, extra)


def get_logger(name: str | None = None) -> logging.Logger:
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def stage_logger(stage: str, *, arch: str | None = None) -> StageLogger:
    """Return a logger whose records read ``[stage] ...`` or ``[stage:arch] ...``."""
    extra = {"stage": stage}
    if arch:
        extra["arch"] = arch
    return StageLogger(get_logger(stage), extra)


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Send pipeline logs to stderr, and to ``log_file`` when given.

    Safe to call more than once; earlier handlers are closed and replaced.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


__all__ = ["StageLogger", "configure_logging", "get_logger", "stage_logger"]
