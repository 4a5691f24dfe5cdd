"""Status command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING

from modpull.cli.commands import Command
from modpull.cli.exit_codes import EXIT_SUCCESS
from modpull.core.paths import get_modpull_home

if TYPE_CHECKING:
    from modpull.config.models import ModpullConfig


class StatusCommand(Command):
    """Shows the modpull version and effective configuration."""

    def __init__(self, version: str):
        self._version = version

    @property
    def name(self) -> str:
        return "status"

    def execute(self, args: Namespace, config: "ModpullConfig | None" = None) -> int:
        print(f"modpull version: {self._version}")
        print(f"Home: {get_modpull_home()}")

        if config is None:
            return EXIT_SUCCESS

        print(f"Registry: {config.registry.base_url}")
        print(f"User agent: {config.registry.user_agent}")
        print(f"Timeout: {config.registry.timeout:g}s")
        print(f"Download directory: {config.download.directory}")
        print(f"Default game version: {config.defaults.game_version}")
        print(f"Default loader: {config.defaults.loader or '(infer)'}")

        sources = config.sources
        print(f"Config sources: {', '.join(sources) if sources else '(built-in defaults)'}")
        return EXIT_SUCCESS
