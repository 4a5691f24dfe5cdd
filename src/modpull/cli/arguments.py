"""Argument parser construction for the modpull CLI.

Subcommands:
- modpull add      - Resolve and download a project artifact
- modpull validate - Check a configuration file
- modpull status   - Show version and effective configuration
"""

from __future__ import annotations

import argparse
from pathlib import Path


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    """Add global options available to all commands."""
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show modpull version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Reduce logging output to errors only.",
    )
    parser.add_argument(
        "--log-file",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        help="Also write logs to PATH (default: ~/.modpull/logs/modpull.log).",
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Path to config file (default: .modpull.yml in the current directory).",
    )


def _lowercase(value: str) -> str:
    return value.lower()


def _build_add_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'add' subcommand parser."""
    add_parser = subparsers.add_parser(
        "add",
        help="Download a project artifact from the registry.",
        description=(
            "Resolve the version of PROJECT matching the requested game "
            "version and loader, download its .jar and verify its digest."
        ),
    )
    add_parser.add_argument(
        "project",
        metavar="PROJECT",
        help="Project id or slug.",
    )
    add_parser.add_argument(
        "--game-version", "-g",
        dest="game_version",
        default=None,
        metavar="VERSION",
        help="Target game version, or 'latest' (default: from config, else latest).",
    )
    add_parser.add_argument(
        "--project-version", "-p",
        dest="project_version",
        default="latest",
        metavar="VERSION",
        help="Registry version id to install, or 'latest' (default: latest).",
    )
    add_parser.add_argument(
        "--loader", "-l",
        type=_lowercase,
        default=None,
        help="Loader to target (required if the project supports several).",
    )
    add_parser.add_argument(
        "--output-dir", "-o",
        dest="output_dir",
        type=Path,
        default=None,
        metavar="DIR",
        help="Directory to write the artifact to (default: current directory).",
    )
    _add_config_option(add_parser)


def _build_validate_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'validate' subcommand parser."""
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a modpull configuration file.",
    )
    _add_config_option(validate_parser)


def _build_status_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'status' subcommand parser."""
    status_parser = subparsers.add_parser(
        "status",
        help="Show version and effective configuration.",
    )
    _add_config_option(status_parser)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for the modpull CLI.

    Returns:
        Configured ArgumentParser instance with subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="modpull",
        description="modpull - fetch verified mods from a package registry.",
        epilog=(
            "Examples:\n"
            "  modpull add lithium                      # Latest version, any game version\n"
            "  modpull add lithium -g 1.20.1            # Latest version for 1.20.1\n"
            "  modpull add sodium -g 1.20.1 -l fabric   # Pick the loader explicitly\n"
            "  modpull add lithium -p ZouiUX7t          # A specific version id\n"
            "  modpull validate                         # Check .modpull.yml\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    _add_global_options(parser)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands:",
        metavar="COMMAND",
    )

    _build_add_parser(subparsers)
    _build_validate_parser(subparsers)
    _build_status_parser(subparsers)

    return parser
