"""Git helpers for upstream discovery and publishing."""

from .publisher import Publisher
from .runner import CommandRunner, run_command
from .upstream import UpstreamResolver

__all__ = ["CommandRunner", "Publisher", "UpstreamResolver", "run_command"]
