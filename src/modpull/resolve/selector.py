"""Pick the installable file out of a resolved version."""

from __future__ import annotations

from modpull.core.errors import ErrorKind, ResolutionError
from modpull.core.logging import get_logger
from modpull.core.models import FileDescriptor, VersionDescriptor

LOGGER = get_logger(__name__)

DEFAULT_ARTIFACT_SUFFIX = ".jar"


def select_artifact(
    version: VersionDescriptor,
    suffix: str = DEFAULT_ARTIFACT_SUFFIX,
) -> FileDescriptor:
    """Return the first file whose name ends with ``suffix``.

    Files are scanned in registry order; when several match, the first one
    wins.

    Raises:
        ResolutionError: NO_INSTALLABLE_ARTIFACT if no file matches.
    """
    for file in version.files:
        if file.filename.endswith(suffix):
            LOGGER.debug(f"Selected artifact {file.filename} from version {version.version_number}")
            return file

    raise ResolutionError(
        ErrorKind.NO_INSTALLABLE_ARTIFACT,
        f"project version {version.version_number} has no {suffix} file "
        f"(files: {', '.join(f.filename for f in version.files) or 'none'})",
    )
