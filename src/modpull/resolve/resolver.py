"""Version resolution.

Picks exactly one version of a project that satisfies the caller's game
version and project version selectors, then checks the loader against it.

The registry cannot answer "which version supports game version X", so the
``latest`` path fetches versions one at a time, newest first. It stops early
once a fetched version only supports game versions strictly older than the
target: version histories are assumed to move forward in the game versions
they support. On a non-monotonic history this can report
NO_COMPATIBLE_VERSION even though an older version would have matched.
"""

from __future__ import annotations

from typing import Optional, Protocol

from modpull.core.errors import ErrorKind, ResolutionError
from modpull.core.logging import get_logger
from modpull.core.models import ProjectDescriptor, VersionDescriptor, is_latest
from modpull.core.versioning import all_older_than

LOGGER = get_logger(__name__)


class VersionSource(Protocol):
    """Anything that can fetch a version descriptor by identifier."""

    def fetch_version(self, version_id: str) -> VersionDescriptor:
        ...


def ensure_server_side(project: ProjectDescriptor) -> None:
    """Fail if the project cannot run on a dedicated server."""
    if not project.server_side.is_supported:
        raise ResolutionError(
            ErrorKind.UNSUPPORTED,
            f"project {project.id} does not support server side",
        )


def resolve_loader(project: ProjectDescriptor, loader: Optional[str]) -> str:
    """Return the loader to target, inferring it when none was given.

    Raises:
        ResolutionError: AMBIGUOUS_LOADER when no loader was given and the
            project does not advertise exactly one.
    """
    if loader:
        return loader

    if len(project.loaders) > 1:
        raise ResolutionError(
            ErrorKind.AMBIGUOUS_LOADER,
            f"project {project.id} supports more than one loader "
            f"({', '.join(project.loaders)}), please specify which to target",
        )
    if not project.loaders:
        raise ResolutionError(
            ErrorKind.AMBIGUOUS_LOADER,
            f"project {project.id} does not advertise any loader, please specify one",
        )

    inferred = project.loaders[0]
    LOGGER.debug(f"Using the only loader advertised by {project.id}: {inferred}")
    return inferred


def check_loader(project: ProjectDescriptor, version: VersionDescriptor, loader: str) -> None:
    """Check the chosen loader against the project and the resolved version."""
    if loader not in project.loaders:
        raise ResolutionError(
            ErrorKind.LOADER_NOT_OFFERED,
            f"project {project.id} does not support {loader} loader",
        )
    if not version.supports_loader(loader):
        raise ResolutionError(
            ErrorKind.INCOMPATIBLE_LOADER,
            f"project version {version.version_number} does not support loader {loader}",
        )


class VersionResolver:
    """Resolves a project version against game version constraints.

    Args:
        source: Where version descriptors are fetched from, usually a
            ``RegistryClient``. Each candidate is fetched at most once.
    """

    def __init__(self, source: VersionSource) -> None:
        self._source = source

    def resolve(
        self,
        project: ProjectDescriptor,
        game_version: str,
        project_version: str,
    ) -> VersionDescriptor:
        """Resolve one version descriptor.

        Args:
            project: The fetched project descriptor.
            game_version: Literal game version or ``latest``.
            project_version: Literal version identifier or ``latest``.

        Returns:
            The matching version descriptor.

        Raises:
            ResolutionError: When no version satisfies the constraints.
        """
        self.validate(project, game_version, project_version)

        if is_latest(project_version):
            return self._resolve_latest(project, game_version)
        return self._resolve_literal(game_version, project_version)

    def validate(self, project: ProjectDescriptor, game_version: str, project_version: str) -> None:
        """Check the selectors against the project listing, without fetching.

        Server-side support is checked by the caller beforehand with
        ``ensure_server_side``.
        """
        if not is_latest(game_version) and game_version not in project.game_versions:
            raise ResolutionError(
                ErrorKind.INCOMPATIBLE_PLATFORM,
                f"project {project.id} does not support Minecraft version {game_version}",
            )

        if not is_latest(project_version) and project_version not in project.versions:
            raise ResolutionError(
                ErrorKind.UNKNOWN_VERSION,
                f"project version {project_version} does not exist",
            )

    def _resolve_literal(self, game_version: str, project_version: str) -> VersionDescriptor:
        version = self._source.fetch_version(project_version)

        if not is_latest(game_version) and not version.supports_game_version(game_version):
            raise ResolutionError(
                ErrorKind.INCOMPATIBLE_PLATFORM,
                f"project version {version.version_number} does not support "
                f"Minecraft version {game_version}",
            )
        return version

    def _resolve_latest(self, project: ProjectDescriptor, game_version: str) -> VersionDescriptor:
        if not project.versions:
            raise ResolutionError(
                ErrorKind.NO_COMPATIBLE_VERSION,
                f"project {project.id} has no published versions",
            )

        if is_latest(game_version):
            newest = project.versions[-1]
            LOGGER.debug(f"Any game version accepted, taking newest version {newest}")
            return self._source.fetch_version(newest)

        for version_id in reversed(project.versions):
            version = self._source.fetch_version(version_id)
            LOGGER.debug(
                f"Checking version {version.version_number} "
                f"(game versions: {', '.join(version.game_versions) or 'none'})"
            )

            if version.supports_game_version(game_version):
                LOGGER.info(
                    f"Selected version {version.version_number} for Minecraft {game_version}"
                )
                return version

            if all_older_than(version.game_versions, game_version):
                raise ResolutionError(
                    ErrorKind.NO_COMPATIBLE_VERSION,
                    f"failed to find a version compatible with Minecraft version {game_version}",
                )

        raise ResolutionError(
            ErrorKind.NO_COMPATIBLE_VERSION,
            f"could not find a version of {project.id} compatible with "
            f"Minecraft version {game_version}",
        )
