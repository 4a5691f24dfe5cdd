"""Configuration validation for modpull.

Warns on unknown keys (with typo suggestions) and flags values of the wrong
type. Validation never raises; callers decide what to do with the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

import yaml

from modpull.core.logging import get_logger

LOGGER = get_logger(__name__)


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Config will fail at runtime
    WARNING = "warning"  # Likely mistake but config usable


@dataclass
class ConfigValidationIssue:
    """A validation issue for configuration with severity."""

    message: str
    source: str
    severity: ValidationSeverity
    key: Optional[str] = None
    suggestion: Optional[str] = None


@dataclass
class ConfigValidationWarning:
    """A validation warning for configuration."""

    message: str
    source: str
    key: Optional[str] = None
    suggestion: Optional[str] = None
    is_error: bool = False


VALID_TOP_LEVEL_KEYS: Set[str] = {"registry", "download", "defaults"}

# Expected types per section key
SECTION_SCHEMAS: Dict[str, Dict[str, Tuple[type, ...]]] = {
    "registry": {
        "base_url": (str,),
        "user_agent": (str,),
        "timeout": (int, float),
        "allow_insecure": (bool,),
    },
    "download": {
        "directory": (str,),
        "chunk_size": (int,),
        "artifact_suffix": (str,),
    },
    "defaults": {
        "game_version": (str,),
        "loader": (str, type(None)),
    },
}


def validate_config(
    data: Dict[str, Any],
    source: str,
) -> List[ConfigValidationWarning]:
    """Validate a configuration dictionary.

    Args:
        data: Config dictionary to validate.
        source: Source file path for warning messages.

    Returns:
        List of validation warnings.
    """
    warnings: List[ConfigValidationWarning] = []

    if not isinstance(data, dict):  # type: ignore[unreachable]
        warnings.append(ConfigValidationWarning(
            message=f"Config must be a mapping, got {type(data).__name__}",
            source=source,
            is_error=True,
        ))
        return warnings  # type: ignore[unreachable]

    for key, value in data.items():
        if key not in VALID_TOP_LEVEL_KEYS:
            _add(warnings, ConfigValidationWarning(
                message=f"Unknown top-level key '{key}'",
                source=source,
                key=key,
                suggestion=_suggest_key(key, VALID_TOP_LEVEL_KEYS),
            ))
            continue

        if value is None:
            continue
        if not isinstance(value, dict):
            _add(warnings, ConfigValidationWarning(
                message=f"'{key}' must be a mapping, got {type(value).__name__}",
                source=source,
                key=key,
                is_error=True,
            ))
            continue

        _validate_section(key, value, source, warnings)

    return warnings


def _validate_section(
    section: str,
    data: Dict[str, Any],
    source: str,
    warnings: List[ConfigValidationWarning],
) -> None:
    schema = SECTION_SCHEMAS[section]
    for key, value in data.items():
        dotted = f"{section}.{key}"
        if key not in schema:
            _add(warnings, ConfigValidationWarning(
                message=f"Unknown key '{dotted}'",
                source=source,
                key=dotted,
                suggestion=_suggest_key(key, set(schema)),
            ))
            continue

        expected = schema[key]
        # bool is an int subclass; only accept it where bool is expected
        if isinstance(value, bool) and bool not in expected:
            matches = False
        else:
            matches = isinstance(value, expected)
        if not matches:
            names = " or ".join(t.__name__ for t in expected if t is not type(None))
            _add(warnings, ConfigValidationWarning(
                message=f"'{dotted}' must be a {names}, got {type(value).__name__}",
                source=source,
                key=dotted,
                is_error=True,
            ))

    chunk_size = data.get("chunk_size") if section == "download" else None
    if isinstance(chunk_size, int) and not isinstance(chunk_size, bool) and chunk_size <= 0:
        _add(warnings, ConfigValidationWarning(
            message=f"Invalid value {chunk_size} for 'download.chunk_size': must be positive",
            source=source,
            key="download.chunk_size",
            is_error=True,
        ))

    base_url = data.get("base_url") if section == "registry" else None
    if isinstance(base_url, str) and not base_url.startswith(("https://", "http://")):
        _add(warnings, ConfigValidationWarning(
            message=f"Invalid value '{base_url}' for 'registry.base_url': must be an http(s) URL",
            source=source,
            key="registry.base_url",
            is_error=True,
        ))


def _add(warnings: List[ConfigValidationWarning], warning: ConfigValidationWarning) -> None:
    warnings.append(warning)
    _log_warning(warning)


def _suggest_key(invalid_key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest a valid key for a potential typo.

    Returns:
        Closest matching valid key, or None if no good match.
    """
    matches = get_close_matches(invalid_key, list(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _log_warning(warning: ConfigValidationWarning) -> None:
    msg = f"{warning.message} in {warning.source}"
    if warning.suggestion:
        msg += f" (did you mean '{warning.suggestion}'?)"
    LOGGER.warning(msg)


def validate_config_file(config_path: Path) -> Tuple[bool, List[ConfigValidationIssue]]:
    """Validate a configuration file from disk.

    Checks file existence, YAML syntax, and configuration semantics.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Tuple of (is_valid, issues) where is_valid is False if any errors exist.
    """
    issues: List[ConfigValidationIssue] = []
    source = str(config_path)

    if not config_path.exists():
        issues.append(ConfigValidationIssue(
            message=f"Configuration file not found: {config_path}",
            source=source,
            severity=ValidationSeverity.ERROR,
        ))
        return False, issues

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        issues.append(ConfigValidationIssue(
            message=f"Invalid YAML syntax: {e}",
            source=source,
            severity=ValidationSeverity.ERROR,
        ))
        return False, issues

    if data is None:
        issues.append(ConfigValidationIssue(
            message="Configuration file is empty",
            source=source,
            severity=ValidationSeverity.WARNING,
        ))
        return True, issues

    for warning in validate_config(data, source):
        issues.append(ConfigValidationIssue(
            message=warning.message,
            source=warning.source,
            severity=ValidationSeverity.ERROR if warning.is_error else ValidationSeverity.WARNING,
            key=warning.key,
            suggestion=warning.suggestion,
        ))

    has_errors = any(issue.severity == ValidationSeverity.ERROR for issue in issues)
    return not has_errors, issues
