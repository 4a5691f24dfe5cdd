"""Typed configuration objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from modpull.core.models import LATEST
from modpull.download.streaming import DEFAULT_CHUNK_SIZE
from modpull.registry.client import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    RegistryClient,
)
from modpull.resolve.selector import DEFAULT_ARTIFACT_SUFFIX


@dataclass
class RegistryConfig:
    """Where the registry lives and how modpull identifies itself."""

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    allow_insecure: bool = False

    def create_client(self) -> RegistryClient:
        return RegistryClient(
            base_url=self.base_url,
            user_agent=self.user_agent,
            timeout=self.timeout,
            allow_insecure=self.allow_insecure,
        )


@dataclass
class DownloadConfig:
    """Where and how artifacts are written."""

    directory: Path = field(default_factory=lambda: Path("."))
    chunk_size: int = DEFAULT_CHUNK_SIZE
    artifact_suffix: str = DEFAULT_ARTIFACT_SUFFIX


@dataclass
class DefaultsConfig:
    """Fallback selectors used when the CLI leaves them out."""

    game_version: str = LATEST
    loader: Optional[str] = None


@dataclass
class ModpullConfig:
    """Complete modpull configuration."""

    registry: RegistryConfig = field(default_factory=RegistryConfig)
    download: DownloadConfig = field(default_factory=DownloadConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    # Where each layer came from, for `modpull status`
    _config_sources: List[str] = field(default_factory=list, repr=False)

    @property
    def sources(self) -> List[str]:
        return list(self._config_sources)
