"""Path management for the modpull home directory.

Directory structure:
    ~/.modpull/
        config/config.yml   - Global configuration
        logs/               - Optional log files
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

# Default directory name under user home
DEFAULT_HOME_DIR_NAME = ".modpull"

# Environment variable to override home directory
MODPULL_HOME_ENV = "MODPULL_HOME"


def get_modpull_home() -> Path:
    """Get the modpull home directory path.

    Resolution order:
    1. MODPULL_HOME environment variable (if set)
    2. ~/.modpull (default)

    Returns:
        Path to the modpull home directory.
    """
    env_home = os.environ.get(MODPULL_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


@dataclass
class ModpullPaths:
    """Paths within the modpull home directory."""

    home: Path

    _CONFIG_DIR: ClassVar[str] = "config"
    _LOGS_DIR: ClassVar[str] = "logs"
    _GLOBAL_CONFIG_NAME: ClassVar[str] = "config.yml"
    _LOG_FILE_NAME: ClassVar[str] = "modpull.log"

    @classmethod
    def default(cls) -> "ModpullPaths":
        """Create paths from the default modpull home."""
        return cls(get_modpull_home())

    @property
    def config_dir(self) -> Path:
        return self.home / self._CONFIG_DIR

    @property
    def logs_dir(self) -> Path:
        return self.home / self._LOGS_DIR

    @property
    def global_config(self) -> Path:
        """Location of the global configuration file."""
        return self.config_dir / self._GLOBAL_CONFIG_NAME

    @property
    def log_file(self) -> Path:
        """Default log file used by ``--log-file`` without an argument."""
        return self.logs_dir / self._LOG_FILE_NAME
