"""Read-only projections of registry responses.

All descriptors are frozen and built once from the decoded JSON body of a
registry response; nothing mutates them afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

# Sentinel accepted for both the game version and the project version.
LATEST = "latest"

# Digest algorithms in order of preference.
PREFERRED_HASH_ALGORITHMS: Tuple[str, ...] = ("sha512", "sha1")


def is_latest(value: Optional[str]) -> bool:
    """Return True if ``value`` is the ``latest`` sentinel."""
    return value == LATEST


class ServerSide(str, Enum):
    """Whether a project runs on a dedicated server."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ServerSide":
        """Parse a registry value, mapping anything unrecognised to UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_supported(self) -> bool:
        return self is not ServerSide.UNSUPPORTED


@dataclass(frozen=True)
class FileHashes:
    """Declared digests of a file, keyed by algorithm name."""

    values: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "FileHashes":
        values = {
            str(algorithm).lower(): str(digest).lower()
            for algorithm, digest in (data or {}).items()
            if digest
        }
        return cls(values=values)

    def get(self, algorithm: str) -> Optional[str]:
        return self.values.get(algorithm.lower())

    def preferred(self) -> Optional[Tuple[str, str]]:
        """Return ``(algorithm, hexdigest)`` for the strongest known digest."""
        for algorithm in PREFERRED_HASH_ALGORITHMS:
            digest = self.values.get(algorithm)
            if digest:
                return algorithm, digest
        return None


@dataclass(frozen=True)
class FileDescriptor:
    """One downloadable file attached to a version."""

    filename: str
    url: str
    hashes: FileHashes = field(default_factory=FileHashes)
    primary: bool = False
    size: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FileDescriptor":
        return cls(
            filename=data["filename"],
            url=data["url"],
            hashes=FileHashes.from_dict(data.get("hashes")),
            primary=bool(data.get("primary", False)),
            size=data.get("size"),
        )


@dataclass(frozen=True)
class VersionDescriptor:
    """One published version of a project.

    Attributes:
        id: Registry identifier used in ``/version/<id>``.
        version_number: Human-facing version string.
        game_versions: Game versions this release supports.
        loaders: Loader identifiers this release supports.
        files: Attached files in registry order.
    """

    id: str
    version_number: str
    game_versions: Tuple[str, ...] = ()
    loaders: Tuple[str, ...] = ()
    files: Tuple[FileDescriptor, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VersionDescriptor":
        version_number = data.get("version_number") or data.get("id", "")
        return cls(
            id=data.get("id", version_number),
            version_number=version_number,
            game_versions=tuple(data.get("game_versions", [])),
            loaders=tuple(data.get("loaders", [])),
            files=tuple(FileDescriptor.from_dict(f) for f in data.get("files", [])),
        )

    def supports_game_version(self, game_version: str) -> bool:
        return game_version in self.game_versions

    def supports_loader(self, loader: str) -> bool:
        return loader in self.loaders


@dataclass(frozen=True)
class ProjectDescriptor:
    """A registry project.

    Attributes:
        id: Registry identifier.
        loaders: Loaders advertised by any version of the project.
        game_versions: Game versions supported by any version of the project.
        server_side: Dedicated server support.
        versions: Known version identifiers, oldest first.
        slug: Human-readable identifier, when supplied.
        title: Display name, when supplied.
        license: License name, when supplied.
    """

    id: str
    loaders: Tuple[str, ...]
    game_versions: Tuple[str, ...]
    server_side: ServerSide
    versions: Tuple[str, ...]
    slug: Optional[str] = None
    title: Optional[str] = None
    license: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], project_id: Optional[str] = None) -> "ProjectDescriptor":
        license_data = data.get("license")
        license_name: Optional[str] = None
        if isinstance(license_data, dict):
            license_name = license_data.get("name") or license_data.get("id")
        elif isinstance(license_data, str):
            license_name = license_data

        return cls(
            id=data.get("id") or project_id or "",
            loaders=tuple(data.get("loaders", [])),
            game_versions=tuple(data.get("game_versions", [])),
            server_side=ServerSide.parse(data.get("server_side")),
            versions=tuple(data.get("versions", [])),
            slug=data.get("slug"),
            title=data.get("title"),
            license=license_name,
        )

    @property
    def display_name(self) -> str:
        return self.title or self.slug or self.id


@dataclass(frozen=True)
class ResolutionRequest:
    """Caller-supplied constraints for a single ``add`` invocation."""

    project_id: str
    game_version: str = LATEST
    project_version: str = LATEST
    loader: Optional[str] = None


@dataclass(frozen=True)
class DownloadResult:
    """Outcome of a verified download."""

    path: Path
    algorithm: str
    digest: str
    size: int


@dataclass(frozen=True)
class InstallResult:
    """Outcome of a completed ``add`` operation."""

    project: ProjectDescriptor
    version: VersionDescriptor
    loader: str
    file: FileDescriptor
    download: DownloadResult

    def summary(self) -> Dict[str, Any]:
        return {
            "project": self.project.display_name,
            "version": self.version.version_number,
            "loader": self.loader,
            "file": self.file.filename,
            "path": str(self.download.path),
            self.download.algorithm: self.download.digest,
        }
