"""Discovery of the latest upstream Wintun release tag."""

from __future__ import annotations

import shutil
from pathlib import Path

from ..errors import CommandError, DiscoveryError
from ..logging import stage_logger
from .runner import CommandRunner, run_command

DEFAULT_GIT_REPO = "https://git.zx2c4.com/wintun"
DEFAULT_SCRATCH_DIR = ".git-wintun"

_LOG = stage_logger("resolve")


class UpstreamResolver:
    """Clones upstream tag metadata into a scratch directory and describes it."""

    def __init__(
        self,
        scratch_dir: Path,
        *,
        git_repo: str = DEFAULT_GIT_REPO,
        runner: CommandRunner | None = None,
    ) -> None:
        self.scratch_dir = Path(scratch_dir)
        self.git_repo = git_repo
        self._runner = runner or run_command

    def identify_latest(self) -> str:
        """Return the most recent tag reachable from upstream history."""
        # A crashed earlier run may have left the clone behind.
        self._remove_scratch()
        cwd = self.scratch_dir.parent

        try:
            self._runner(
                ["git", "clone", "--no-checkout", self.git_repo, str(self.scratch_dir)],
                cwd=cwd,
            )
        except (CommandError, OSError) as exc:
            raise DiscoveryError(f"unable to clone {self.git_repo}: {exc}") from exc

        git_dir = self.scratch_dir / ".git"
        try:
            output = self._runner(
                ["git", "--git-dir", str(git_dir), "describe", "--tags", "--abbrev=0"],
                cwd=cwd,
                capture_output=True,
            )
        except (CommandError, OSError) as exc:
            raise DiscoveryError(f"failed to get version from git repo: {exc}") from exc

        self._remove_scratch()
        version = output.strip()
        if not version:
            raise DiscoveryError(f"no tag could be described in {self.git_repo}")
        _LOG.debug("upstream describe returned %s", version)
        return version

    def _remove_scratch(self) -> None:
        if not self.scratch_dir.exists():
            return
        try:
            shutil.rmtree(self.scratch_dir)
        except OSError as exc:
            raise DiscoveryError(
                f"failed to remove scratch directory {self.scratch_dir}: {exc}"
            ) from exc


__all__ = ["DEFAULT_GIT_REPO", "DEFAULT_SCRATCH_DIR", "UpstreamResolver"]
