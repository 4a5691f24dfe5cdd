"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modpull.config.models import ModpullConfig


class Command(ABC):
    """Base class for CLI commands."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier."""

    @abstractmethod
    def execute(self, args: Namespace, config: "ModpullConfig | None" = None) -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.
            config: Optional modpull configuration.

        Returns:
            Exit code (0 for success, non-zero for error).
        """


# ruff: noqa: E402
from modpull.cli.commands.add import AddCommand
from modpull.cli.commands.status import StatusCommand
from modpull.cli.commands.validate import ValidateCommand

__all__ = [
    "AddCommand",
    "Command",
    "StatusCommand",
    "ValidateCommand",
]
