"""Entry point that runs the full regeneration pipeline."""

from __future__ import annotations

import sys
from pathlib import Path

from .config import load_config
from .errors import WintunEmbedError
from .logging import configure_logging, get_logger
from .orchestrator import Pipeline


def main() -> None:
    """Regenerate the embedded modules for the project in the current directory.

    Takes no arguments. Exits non-zero after logging the first failure.
    """
    configure_logging()
    log = get_logger()
    try:
        config = load_config(Path.cwd())
        configure_logging(verbose=config.logging.verbose, log_file=config.logging.log_file)
        Pipeline(config).run()
    except WintunEmbedError as exc:
        log.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
