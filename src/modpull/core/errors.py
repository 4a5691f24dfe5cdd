"""Error types raised by modpull.

Every failure is terminal for the current operation: nothing in the core
retries or recovers. The CLI commands are the only place these are caught.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Which constraint or step failed."""

    UNSUPPORTED = "unsupported"
    INCOMPATIBLE_PLATFORM = "incompatible_platform"
    UNKNOWN_VERSION = "unknown_version"
    NO_COMPATIBLE_VERSION = "no_compatible_version"
    AMBIGUOUS_LOADER = "ambiguous_loader"
    LOADER_NOT_OFFERED = "loader_not_offered"
    INCOMPATIBLE_LOADER = "incompatible_loader"
    NO_INSTALLABLE_ARTIFACT = "no_installable_artifact"
    MISSING_DIGEST = "missing_digest"
    HASH_MISMATCH = "hash_mismatch"
    DOWNLOAD = "download"
    REGISTRY = "registry"


class ModpullError(Exception):
    """Base class for all modpull errors."""

    kind: ErrorKind = ErrorKind.REGISTRY

    def __init__(self, message: str, kind: Optional[ErrorKind] = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class ResolutionError(ModpullError):
    """A project, version, loader or artifact constraint was not satisfied."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message, kind)


class DownloadError(ModpullError):
    """The artifact could not be downloaded or verified."""

    kind = ErrorKind.DOWNLOAD


class HashMismatchError(DownloadError):
    """Downloaded bytes do not match the registry-declared digest."""

    def __init__(self, filename: str, algorithm: str, expected: str, actual: str) -> None:
        super().__init__(
            f"{algorithm} digest of {filename} does not match: "
            f"expected {expected}, got {actual}",
            ErrorKind.HASH_MISMATCH,
        )
        self.filename = filename
        self.algorithm = algorithm
        self.expected = expected
        self.actual = actual


class RegistryError(ModpullError):
    """Transport or decoding failure while talking to the registry."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message, ErrorKind.REGISTRY)
        self.url = url
