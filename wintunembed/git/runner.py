"""Subprocess execution shared by the git helpers."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable

from ..errors import CommandError
from ..logging import get_logger

_LOG = get_logger("git")

# runner(args, *, cwd, env=None, capture_output=False) -> stdout text
CommandRunner = Callable[..., str]


def run_command(
    args: Iterable[str],
    *,
    cwd: Path,
    env: dict[str, str] | None = None,
    capture_output: bool = False,
) -> str:
    """Run ``args`` to completion and return its combined output when requested.

    stderr is folded into stdout so a failure message carries whatever the
    command printed. A non-zero exit raises :class:`CommandError`.
    """
    command = list(args)
    _LOG.debug("running %s (cwd=%s)", " ".join(command), cwd)
    completed = subprocess.run(
        command,
        cwd=str(cwd),
        env=env,
        check=False,
        text=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
    )
    output = completed.stdout or ""
    if completed.returncode != 0:
        raise CommandError(command, completed.returncode, output)
    return output if capture_output else ""


__all__ = ["CommandRunner", "run_command"]
