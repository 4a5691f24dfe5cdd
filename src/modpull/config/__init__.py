"""Configuration loading for modpull."""

from modpull.config.loader import ConfigError, load_config
from modpull.config.models import DefaultsConfig, DownloadConfig, ModpullConfig, RegistryConfig

__all__ = [
    "ConfigError",
    "DefaultsConfig",
    "DownloadConfig",
    "ModpullConfig",
    "RegistryConfig",
    "load_config",
]
