"""Add command implementation."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import TYPE_CHECKING

from modpull.cli.commands import Command
from modpull.cli.exit_codes import (
    EXIT_DOWNLOAD_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_REGISTRY_ERROR,
    EXIT_RESOLUTION_FAILURE,
    EXIT_SUCCESS,
)
from modpull.core.errors import DownloadError, RegistryError, ResolutionError
from modpull.core.logging import get_logger
from modpull.core.models import LATEST, ResolutionRequest
from modpull.installer import add_project

if TYPE_CHECKING:
    from modpull.config.models import ModpullConfig

LOGGER = get_logger(__name__)


class AddCommand(Command):
    """Resolves a project version and downloads its artifact."""

    @property
    def name(self) -> str:
        return "add"

    def build_request(self, args: Namespace, config: "ModpullConfig") -> ResolutionRequest:
        """Combine CLI arguments with configured defaults."""
        return ResolutionRequest(
            project_id=args.project,
            game_version=args.game_version or config.defaults.game_version or LATEST,
            project_version=args.project_version or LATEST,
            loader=args.loader or config.defaults.loader,
        )

    def execute(self, args: Namespace, config: "ModpullConfig | None" = None) -> int:
        """Execute the add command.

        Returns:
            Exit code: 0 = installed, 1 = resolution failed, 2 = download or
            verification failed, 4 = registry unreachable or malformed.
        """
        if config is None:
            LOGGER.error("add requires a loaded configuration")
            return EXIT_INVALID_USAGE

        request = self.build_request(args, config)
        destination_dir = Path(args.output_dir or config.download.directory)
        client = config.registry.create_client()
        debug = bool(getattr(args, "debug", False))

        try:
            result = add_project(
                client,
                request,
                destination_dir,
                artifact_suffix=config.download.artifact_suffix,
                chunk_size=config.download.chunk_size,
            )
        except ResolutionError as e:
            LOGGER.error(str(e), exc_info=debug)
            return EXIT_RESOLUTION_FAILURE
        except DownloadError as e:
            LOGGER.error(str(e), exc_info=debug)
            return EXIT_DOWNLOAD_FAILURE
        except RegistryError as e:
            LOGGER.error(str(e), exc_info=debug)
            return EXIT_REGISTRY_ERROR

        print(
            f"Installed {result.project.display_name} {result.version.version_number} "
            f"({result.loader}) -> {result.download.path}"
        )
        return EXIT_SUCCESS
