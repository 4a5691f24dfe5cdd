"""Version resolution and artifact selection."""

from modpull.resolve.resolver import (
    VersionResolver,
    check_loader,
    ensure_server_side,
    resolve_loader,
)
from modpull.resolve.selector import DEFAULT_ARTIFACT_SUFFIX, select_artifact

__all__ = [
    "DEFAULT_ARTIFACT_SUFFIX",
    "VersionResolver",
    "check_loader",
    "ensure_server_side",
    "resolve_loader",
    "select_artifact",
]
