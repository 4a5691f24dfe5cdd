"""Configuration file loading and merging.

Handles loading configuration from YAML files with:
- Project-level config (.modpull.yml in the working directory)
- Global config (~/.modpull/config/config.yml)
- Environment variable expansion (${VAR})
- Config merging with proper precedence
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from modpull.config.models import DefaultsConfig, DownloadConfig, ModpullConfig, RegistryConfig
from modpull.config.validation import validate_config
from modpull.core.logging import get_logger
from modpull.core.paths import ModpullPaths

LOGGER = get_logger(__name__)

# Config file names
PROJECT_CONFIG_NAMES = [".modpull.yml", ".modpull.yaml", "modpull.yml", "modpull.yaml"]

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigError(Exception):
    """Configuration loading or parsing error."""

    pass


def load_config(
    project_root: Path,
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> ModpullConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (cli_overrides)
    2. Custom config file (cli_config_path) OR project config (.modpull.yml)
    3. Global config (~/.modpull/config/config.yml)
    4. Built-in defaults

    Args:
        project_root: Directory searched for a project config file.
        cli_config_path: Optional path to custom config file (--config flag).
        cli_overrides: Dict of CLI flag overrides.

    Returns:
        Merged ModpullConfig instance.

    Raises:
        ConfigError: If the specified config file doesn't exist or has parse errors.
    """
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    # Layer 1: Global config
    global_path = find_global_config()
    if global_path is not None:
        try:
            global_dict = load_yaml_file(global_path)
            validate_config(global_dict, source=str(global_path))
            merged = merge_configs(merged, global_dict)
            sources.append(f"global:{global_path}")
            LOGGER.debug(f"Loaded global config from {global_path}")
        except (yaml.YAMLError, ConfigError, OSError) as e:
            LOGGER.warning(f"Failed to load global config: {e}")

    # Layer 2: Project or custom config
    if cli_config_path:
        if not cli_config_path.exists():
            raise ConfigError(f"Config file not found: {cli_config_path}")
        merged = _merge_file(merged, cli_config_path)
        sources.append(f"custom:{cli_config_path}")
    else:
        project_path = find_project_config(project_root)
        if project_path is not None:
            merged = _merge_file(merged, project_path)
            sources.append(f"project:{project_path}")

    # Layer 3: CLI overrides
    if cli_overrides:
        merged = merge_configs(merged, cli_overrides)
        sources.append("cli")
        LOGGER.debug("Applied CLI overrides")

    config = dict_to_config(merged)
    config._config_sources = sources

    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def _merge_file(merged: Dict[str, Any], path: Path) -> Dict[str, Any]:
    try:
        data = load_yaml_file(path)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    validate_config(data, source=str(path))
    LOGGER.debug(f"Loaded config from {path}")
    return merge_configs(merged, data)


def find_project_config(project_root: Path) -> Optional[Path]:
    """Find a config file in the project root.

    Args:
        project_root: Directory to search in.

    Returns:
        Path to config file if found, None otherwise.
    """
    for name in PROJECT_CONFIG_NAMES:
        config_path = project_root / name
        if config_path.exists():
            return config_path
    return None


def find_global_config() -> Optional[Path]:
    """Find the global config at ~/.modpull/config/config.yml.

    Returns:
        Path to global config if it exists, None otherwise.
    """
    config_path = ModpullPaths.default().global_config
    if config_path.exists():
        return config_path
    return None


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file.

    Performs environment variable expansion on string values.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data)


def expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR} and ${VAR:-default} in string values."""
    if isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    else:
        return data


def _env_var_replacer(match: re.Match[str]) -> str:
    var_name = match.group(1)
    default_value = match.group(2)

    value = os.environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two config dicts, with overlay taking precedence.

    Scalars and lists in the overlay replace the base; dicts merge
    recursively.
    """
    result = base.copy()

    for key, overlay_value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(overlay_value, dict):
            result[key] = merge_configs(result[key], overlay_value)
        else:
            result[key] = overlay_value

    return result


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {type(section).__name__}")
    return section


def dict_to_config(data: Dict[str, Any]) -> ModpullConfig:
    """Convert a merged dict to a typed ModpullConfig.

    Raises:
        ConfigError: If a value has the wrong type.
    """
    registry_data = _section(data, "registry")
    download_data = _section(data, "download")
    defaults_data = _section(data, "defaults")

    registry = RegistryConfig()
    try:
        if "base_url" in registry_data:
            registry.base_url = str(registry_data["base_url"])
        if "user_agent" in registry_data:
            registry.user_agent = str(registry_data["user_agent"])
        if registry_data.get("timeout") is not None:
            registry.timeout = float(registry_data["timeout"])
        allow_insecure = registry_data.get("allow_insecure", False)
        if not isinstance(allow_insecure, bool):
            raise ConfigError(
                f"'registry.allow_insecure' must be true or false, got {allow_insecure!r}"
            )
        registry.allow_insecure = allow_insecure

        download = DownloadConfig()
        if download_data.get("directory"):
            download.directory = Path(download_data["directory"]).expanduser()
        if download_data.get("chunk_size") is not None:
            download.chunk_size = int(download_data["chunk_size"])
        if download_data.get("artifact_suffix"):
            download.artifact_suffix = str(download_data["artifact_suffix"])
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration value: {e}") from e

    if download.chunk_size <= 0:
        raise ConfigError(f"'download.chunk_size' must be positive, got {download.chunk_size}")

    defaults = DefaultsConfig()
    if defaults_data.get("game_version"):
        defaults.game_version = str(defaults_data["game_version"])
    if defaults_data.get("loader"):
        defaults.loader = str(defaults_data["loader"]).lower()

    return ModpullConfig(registry=registry, download=download, defaults=defaults)
