"""Stream an artifact to disk and verify its digest in the same pass."""

from __future__ import annotations

from http.client import HTTPException
from pathlib import Path
from typing import BinaryIO

from modpull.core.errors import DownloadError, ErrorKind, HashMismatchError, RegistryError
from modpull.core.logging import get_logger
from modpull.core.models import DownloadResult, FileDescriptor
from modpull.download.streaming import DEFAULT_CHUNK_SIZE, DigestSink, FileSink, fan_out
from modpull.registry.client import RegistryClient

LOGGER = get_logger(__name__)


class _RegistryStream:
    """Read side of an artifact response.

    Read failures belong to the registry connection, not to the local file,
    so they surface as ``RegistryError``.
    """

    def __init__(self, response: BinaryIO, url: str) -> None:
        self._response = response
        self._url = url

    def read(self, size: int = -1) -> bytes:
        try:
            return self._response.read(size)
        except (HTTPException, OSError) as e:
            raise RegistryError(f"Download interrupted for {self._url}: {e!r}", url=self._url) from e


def download_and_verify(
    client: RegistryClient,
    file: FileDescriptor,
    destination: Path,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> DownloadResult:
    """Download ``file`` to ``destination`` and check its declared digest.

    The destination is created or truncated before any byte is checked.
    On a mismatch the written file is left in place.

    Args:
        client: Registry client used to open the byte stream.
        file: The artifact to download.
        destination: Target file path.
        chunk_size: Bytes per read.

    Returns:
        DownloadResult with the computed digest and byte count.

    Raises:
        DownloadError: MISSING_DIGEST if the registry declared no usable
            digest, or the destination could not be written.
        HashMismatchError: If the computed digest differs.
        RegistryError: If the stream could not be opened or read.
    """
    declared = file.hashes.preferred()
    if declared is None:
        raise DownloadError(
            f"{file.filename} has no sha512 or sha1 digest to verify against",
            ErrorKind.MISSING_DIGEST,
        )
    algorithm, expected = declared

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DownloadError(f"Failed to create {destination.parent}: {e}") from e

    LOGGER.info(f"Downloading {file.filename} to {destination}")

    digest = DigestSink(algorithm)
    with client.open_stream(file.url) as response:
        stream = _RegistryStream(response, file.url)
        try:
            with open(destination, "wb") as handle:
                size = fan_out(stream, [FileSink(handle), digest], chunk_size=chunk_size)
        except OSError as e:
            raise DownloadError(f"Failed to write {destination}: {e}") from e

    actual = digest.hexdigest()
    if actual != expected.lower():
        raise HashMismatchError(file.filename, algorithm, expected, actual)

    LOGGER.info(f"Verified {file.filename} ({size} bytes, {algorithm})")
    return DownloadResult(path=destination, algorithm=algorithm, digest=actual, size=size)
