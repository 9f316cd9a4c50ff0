from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

LOG_LEVEL_ENV = "WAVELENGTH_LOG_LEVEL"


def _ensure_repo_root_on_path() -> None:
    """Ensure the repository root (parent of this package) is on ``sys.path``.

    Lets ``python wavelength_coop/__main__.py`` resolve the package imports
    the same way ``python -m wavelength_coop`` does.
    """
    pkg_dir = Path(__file__).resolve().parent
    repo_root_str = str(pkg_dir.parent)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


if __package__:
    from .app import run
else:
    # Executed as a plain script (IDE "Run Python File", absolute path, etc.)
    _ensure_repo_root_on_path()
    from wavelength_coop.app import run


def configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main() -> int:
    """Entry point for running the game from the command line."""
    configure_logging()
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
