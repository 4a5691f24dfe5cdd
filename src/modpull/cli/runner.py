"""CLI runner orchestration.

This module handles command dispatch and execution for the modpull CLI.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Iterable, Optional

from modpull.cli.arguments import build_parser
from modpull.cli.commands.add import AddCommand
from modpull.cli.commands.status import StatusCommand
from modpull.cli.commands.validate import ValidateCommand
from modpull.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from modpull.config.loader import ConfigError, load_config
from modpull.config.models import ModpullConfig
from modpull.core.logging import configure_logging, get_logger
from modpull.core.paths import ModpullPaths

LOGGER = get_logger(__name__)


def get_version() -> str:
    """Get modpull version.

    Returns:
        Version string from package metadata or fallback.
    """
    try:
        return version("modpull")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from modpull import __version__
        return __version__


class CLIRunner:
    """Orchestrates CLI execution with subcommand dispatch."""

    def __init__(self) -> None:
        self.parser = build_parser()
        self._version = get_version()
        self.add_cmd = AddCommand()
        self.validate_cmd = ValidateCommand()
        self.status_cmd = StatusCommand(version=self._version)

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv).

        Returns:
            Exit code.
        """
        argv_list = list(argv) if argv is not None else None

        try:
            args = self.parser.parse_args(argv_list)
        except SystemExit as e:
            # argparse exits for --help (0) and usage errors (2)
            return EXIT_SUCCESS if e.code in (0, None) else EXIT_INVALID_USAGE

        configure_logging(
            debug=args.debug,
            verbose=args.verbose,
            quiet=args.quiet,
            log_file=self._log_file(args.log_file),
        )

        if args.version:
            print(self._version)
            return EXIT_SUCCESS

        command = getattr(args, "command", None)

        if command == "add":
            return self._handle_add(args)
        elif command == "validate":
            return self.validate_cmd.execute(args)
        elif command == "status":
            return self._handle_status(args)
        else:
            self.parser.print_help()
            return EXIT_SUCCESS

    def _log_file(self, value: Optional[str]) -> Optional[Path]:
        if value is None:
            return None
        if value == "":
            return ModpullPaths.default().log_file
        return Path(value)

    def _load_config(self, args) -> Optional[ModpullConfig]:
        try:
            return load_config(
                project_root=Path.cwd(),
                cli_config_path=getattr(args, "config", None),
            )
        except ConfigError as e:
            LOGGER.error(str(e))
            return None

    def _handle_add(self, args) -> int:
        """Handle the add command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code.
        """
        config = self._load_config(args)
        if config is None:
            return EXIT_INVALID_USAGE

        return self.add_cmd.execute(args, config)

    def _handle_status(self, args) -> int:
        config = self._load_config(args)
        if config is None:
            return EXIT_INVALID_USAGE
        return self.status_cmd.execute(args, config)
