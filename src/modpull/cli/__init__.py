"""Command-line interface for modpull."""

from __future__ import annotations

from typing import Iterable, Optional

from modpull.cli.runner import CLIRunner


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point for the ``modpull`` console script."""
    return CLIRunner().run(argv)


__all__ = ["CLIRunner", "main"]
