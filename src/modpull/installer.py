"""The ``add`` operation.

Fetches a project, resolves the version to install, checks the loader,
selects the artifact and downloads it with digest verification. Every step
runs sequentially and any failure aborts the whole operation.
"""

from __future__ import annotations

from pathlib import Path

from modpull.core.errors import DownloadError
from modpull.core.logging import get_logger
from modpull.core.models import InstallResult, ResolutionRequest
from modpull.download.streaming import DEFAULT_CHUNK_SIZE
from modpull.download.verifier import download_and_verify
from modpull.registry.client import RegistryClient
from modpull.resolve.resolver import (
    VersionResolver,
    check_loader,
    ensure_server_side,
    resolve_loader,
)
from modpull.resolve.selector import DEFAULT_ARTIFACT_SUFFIX, select_artifact

LOGGER = get_logger(__name__)


def add_project(
    client: RegistryClient,
    request: ResolutionRequest,
    destination_dir: Path,
    *,
    artifact_suffix: str = DEFAULT_ARTIFACT_SUFFIX,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> InstallResult:
    """Resolve and download one project artifact.

    Args:
        client: Registry client.
        request: Game version, project version and loader constraints.
        destination_dir: Directory the artifact is written to, under the
            registry-declared file name.
        artifact_suffix: File name suffix identifying the installable file.
        chunk_size: Bytes per read while downloading.

    Returns:
        InstallResult describing what was installed.

    Raises:
        ResolutionError: If a constraint is not satisfied.
        DownloadError: If the download fails or does not verify.
        RegistryError: On transport or decoding failures.
    """
    LOGGER.info(f"Fetching project {request.project_id}")
    project = client.fetch_project(request.project_id)

    ensure_server_side(project)
    loader = resolve_loader(project, request.loader)

    resolver = VersionResolver(client)
    version = resolver.resolve(project, request.game_version, request.project_version)
    LOGGER.info(f"Resolved {project.display_name} to version {version.version_number}")

    check_loader(project, version, loader)

    file = select_artifact(version, suffix=artifact_suffix)

    # Registry file names must not escape the destination directory
    destination = (destination_dir / file.filename).resolve()
    if not destination.is_relative_to(destination_dir.resolve()):
        raise DownloadError(f"Refusing to write outside {destination_dir}: {file.filename}")

    download = download_and_verify(
        client,
        file,
        destination,
        chunk_size=chunk_size,
    )

    return InstallResult(
        project=project,
        version=version,
        loader=loader,
        file=file,
        download=download,
    )
