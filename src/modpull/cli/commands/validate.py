"""Validate command implementation.

Checks a modpull config file against the registry/download/defaults schema
without contacting the registry.
"""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from modpull.cli.commands import Command
from modpull.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_RESOLUTION_FAILURE, EXIT_SUCCESS
from modpull.config.loader import PROJECT_CONFIG_NAMES, find_project_config
from modpull.config.validation import (
    ConfigValidationIssue,
    ValidationSeverity,
    validate_config_file,
)

if TYPE_CHECKING:
    from modpull.config.models import ModpullConfig


class ValidateCommand(Command):
    """Reports unknown keys, typos and bad values in a modpull config."""

    @property
    def name(self) -> str:
        return "validate"

    def execute(self, args: Namespace, config: "ModpullConfig | None" = None) -> int:
        """Validate ``--config`` or the project config in the working directory.

        Returns:
            0 if usable (warnings allowed), 1 if ``modpull add`` would reject
            it, 3 if there is no file to check.
        """
        path = self._target(getattr(args, "config", None))
        if path is None:
            print(f"No modpull config in {Path.cwd()} (tried {', '.join(PROJECT_CONFIG_NAMES)}).")
            return EXIT_INVALID_USAGE
        if not path.exists():
            print(f"{path}: no such file")
            return EXIT_INVALID_USAGE

        is_valid, issues = validate_config_file(path)
        errors = _with_severity(issues, ValidationSeverity.ERROR)
        warnings = _with_severity(issues, ValidationSeverity.WARNING)

        for label, group in (("error", errors), ("warning", warnings)):
            for issue in group:
                print(_format_issue(path, label, issue))

        if not is_valid:
            print(f"{path}: invalid, {len(errors)} error(s), {len(warnings)} warning(s)")
            return EXIT_RESOLUTION_FAILURE

        summary = f"{len(warnings)} warning(s)" if warnings else "no issues"
        print(f"{path}: OK, {summary}")
        return EXIT_SUCCESS

    def _target(self, explicit: Optional[Path]) -> Optional[Path]:
        if explicit:
            return Path(explicit)
        return find_project_config(Path.cwd())


def _with_severity(
    issues: List[ConfigValidationIssue], severity: ValidationSeverity
) -> List[ConfigValidationIssue]:
    return [issue for issue in issues if issue.severity == severity]


def _format_issue(path: Path, label: str, issue: ConfigValidationIssue) -> str:
    where = f"{path}: {issue.key}" if issue.key else str(path)
    line = f"{where}: {label}: {issue.message}"
    if issue.suggestion:
        line += f" (did you mean '{issue.suggestion}'?)"
    return line
