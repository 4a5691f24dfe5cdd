"""Logging setup shared by the CLI and library modules."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Root of the package logger hierarchy
ROOT_LOGGER_NAME = "modpull"


def resolve_log_level(*, debug: bool = False, verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level.

    Precedence:
    - quiet → ERROR
    - debug → DEBUG
    - verbose → INFO
    - default → WARNING
    """
    if quiet:
        return logging.ERROR
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def configure_logging(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
) -> int:
    """Configure root logging based on CLI flags.

    When ``log_file`` is given, records at the same level are also appended
    to that file (its parent directory is created).

    Returns:
        The logging level that was applied.
    """
    level = resolve_log_level(debug=debug, verbose=verbose, quiet=quiet)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger(ROOT_LOGGER_NAME).addHandler(handler)

    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger."""

    return logging.getLogger(name if name is not None else ROOT_LOGGER_NAME)
