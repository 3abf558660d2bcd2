"""Git publishing of regenerated modules."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from ..errors import CommandError, PublishError
from ..logging import stage_logger
from ..models import Version
from .runner import CommandRunner, run_command

_LOG = stage_logger("publish")


class Publisher:
    """Detects working-tree changes and commits, tags and pushes them."""

    def __init__(
        self,
        repo_path: Path | str,
        runner: CommandRunner | None = None,
        *,
        remote: str = "origin",
    ) -> None:
        self.repo = Path(repo_path)
        self.remote = remote
        self._runner = runner or run_command

    def has_changes(self) -> bool:
        """Return True when ``git status`` reports anything uncommitted."""
        status = self._run(
            ["git", "status", "--porcelain=v1"],
            action="check git status",
            capture_output=True,
        )
        return bool(status.strip())

    def publish(self, version: Version) -> None:
        """Commit everything, tag it ``v<version>`` and push branch and tag."""
        ver = version.normalized
        tag = version.tag

        self._run(["git", "add", "."], action="git add")
        self._run(
            ["git", "commit", "-m", f"updated to Wintun version {ver}"],
            action="create commit",
            env=self._commit_env(),
        )
        self._run(
            ["git", "tag", "-f", "-a", tag, "-m", f"Wintun version {ver}"],
            action="create git tag",
            env=self._commit_env(),
        )
        self._run(["git", "push", "--follow-tags"], action="push")
        # --follow-tags does not always carry a force-moved tag; push it by name.
        self._run(["git", "push", self.remote, tag], action="push tag")
        _LOG.info("published %s", tag)

    # ------------------------------------------------------------------
    # Helpers

    @staticmethod
    def _commit_env() -> dict[str, str]:
        env = os.environ.copy()
        env.setdefault("GIT_AUTHOR_NAME", "wintunembed")
        env.setdefault("GIT_AUTHOR_EMAIL", "wintunembed@example.com")
        env.setdefault("GIT_COMMITTER_NAME", env["GIT_AUTHOR_NAME"])
        env.setdefault("GIT_COMMITTER_EMAIL", env["GIT_AUTHOR_EMAIL"])
        return env

    def _run(
        self,
        args: Iterable[str],
        *,
        action: str,
        env: dict[str, str] | None = None,
        capture_output: bool = False,
    ) -> str:
        try:
            return self._runner(args, cwd=self.repo, env=env, capture_output=capture_output)
        except (CommandError, OSError) as exc:
            raise PublishError(f"unable to {action}: {exc}") from exc


__all__ = ["Publisher"]
