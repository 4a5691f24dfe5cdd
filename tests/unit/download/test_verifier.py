"""Tests for verified downloads."""

from __future__ import annotations

import hashlib
import io
from contextlib import contextmanager
from http.client import IncompleteRead
from pathlib import Path
from typing import Iterator

import pytest

from modpull.core.errors import DownloadError, ErrorKind, HashMismatchError, RegistryError
from modpull.core.models import FileDescriptor, FileHashes
from modpull.download.verifier import download_and_verify

CONTENT = b"PK\x03\x04 pretend this is a jar" * 500
URL = "https://cdn.example.com/example-1.0.jar"


class _TruncatedStream(io.BytesIO):
    """Serves a few bytes, then fails the way a dropped connection does."""

    def read(self, size: int = -1) -> bytes:
        if self.tell() >= 3:
            raise IncompleteRead(b"", 100)
        return super().read(3)


class _TruncatingRegistry:
    def __init__(self) -> None:
        self.closed = False

    @contextmanager
    def open_stream(self, url: str) -> Iterator[io.BytesIO]:
        try:
            yield _TruncatedStream(CONTENT)
        finally:
            self.closed = True


class TestDownloadAndVerify:
    """Tests for download_and_verify."""

    def test_writes_file_and_returns_digest(self, tmp_path: Path, registry_factory) -> None:
        registry = registry_factory({}, artifacts={URL: CONTENT})
        file = FileDescriptor(
            filename="example-1.0.jar",
            url=URL,
            hashes=FileHashes.from_dict({"sha512": hashlib.sha512(CONTENT).hexdigest()}),
        )
        destination = tmp_path / "example-1.0.jar"

        result = download_and_verify(registry, file, destination, chunk_size=1000)

        assert destination.read_bytes() == CONTENT
        assert result.algorithm == "sha512"
        assert result.digest == hashlib.sha512(CONTENT).hexdigest()
        assert result.size == len(CONTENT)
        assert registry.opened_urls == [URL]

    def test_mismatch_raises_and_keeps_file(self, tmp_path: Path, registry_factory) -> None:
        registry = registry_factory({}, artifacts={URL: CONTENT})
        file = FileDescriptor(
            filename="example-1.0.jar",
            url=URL,
            hashes=FileHashes.from_dict({"sha512": "0" * 128}),
        )
        destination = tmp_path / "example-1.0.jar"

        with pytest.raises(HashMismatchError) as exc_info:
            download_and_verify(registry, file, destination)

        assert exc_info.value.kind is ErrorKind.HASH_MISMATCH
        assert exc_info.value.expected == "0" * 128
        assert exc_info.value.actual == hashlib.sha512(CONTENT).hexdigest()
        assert destination.read_bytes() == CONTENT

    def test_uppercase_declared_digest_matches(self, tmp_path: Path, registry_factory) -> None:
        registry = registry_factory({}, artifacts={URL: CONTENT})
        file = FileDescriptor(
            filename="example-1.0.jar",
            url=URL,
            hashes=FileHashes(values={"sha512": hashlib.sha512(CONTENT).hexdigest().upper()}),
        )

        result = download_and_verify(registry, file, tmp_path / "example-1.0.jar")

        assert result.digest == hashlib.sha512(CONTENT).hexdigest()

    def test_falls_back_to_sha1(self, tmp_path: Path, registry_factory) -> None:
        registry = registry_factory({}, artifacts={URL: CONTENT})
        file = FileDescriptor(
            filename="example-1.0.jar",
            url=URL,
            hashes=FileHashes.from_dict({"sha1": hashlib.sha1(CONTENT).hexdigest()}),
        )

        result = download_and_verify(registry, file, tmp_path / "example-1.0.jar")

        assert result.algorithm == "sha1"

    def test_missing_digest_fails_before_download(self, tmp_path: Path, registry_factory) -> None:
        registry = registry_factory({}, artifacts={URL: CONTENT})
        file = FileDescriptor(filename="example-1.0.jar", url=URL)
        destination = tmp_path / "example-1.0.jar"

        with pytest.raises(DownloadError) as exc_info:
            download_and_verify(registry, file, destination)

        assert exc_info.value.kind is ErrorKind.MISSING_DIGEST
        assert registry.opened_urls == []
        assert not destination.exists()

    def test_creates_parent_directories(self, tmp_path: Path, registry_factory) -> None:
        registry = registry_factory({}, artifacts={URL: CONTENT})
        file = FileDescriptor(
            filename="example-1.0.jar",
            url=URL,
            hashes=FileHashes.from_dict({"sha1": hashlib.sha1(CONTENT).hexdigest()}),
        )
        destination = tmp_path / "mods" / "example-1.0.jar"

        download_and_verify(registry, file, destination)

        assert destination.exists()

    def test_overwrites_existing_file(self, tmp_path: Path, registry_factory) -> None:
        registry = registry_factory({}, artifacts={URL: CONTENT})
        file = FileDescriptor(
            filename="example-1.0.jar",
            url=URL,
            hashes=FileHashes.from_dict({"sha1": hashlib.sha1(CONTENT).hexdigest()}),
        )
        destination = tmp_path / "example-1.0.jar"
        destination.write_bytes(b"stale" * 100_000)

        download_and_verify(registry, file, destination)

        assert destination.read_bytes() == CONTENT

    def test_interrupted_stream_is_registry_error(self, tmp_path: Path) -> None:
        registry = _TruncatingRegistry()
        file = FileDescriptor(
            filename="example-1.0.jar",
            url=URL,
            hashes=FileHashes.from_dict({"sha512": hashlib.sha512(CONTENT).hexdigest()}),
        )

        with pytest.raises(RegistryError, match="Download interrupted") as exc_info:
            download_and_verify(registry, file, tmp_path / "example-1.0.jar", chunk_size=1000)

        assert isinstance(exc_info.value.__cause__, IncompleteRead)
        assert exc_info.value.url == URL
        assert registry.closed

    def test_unwritable_destination_is_download_error(
        self, tmp_path: Path, registry_factory
    ) -> None:
        registry = registry_factory({}, artifacts={URL: CONTENT})
        file = FileDescriptor(
            filename="example-1.0.jar",
            url=URL,
            hashes=FileHashes.from_dict({"sha1": hashlib.sha1(CONTENT).hexdigest()}),
        )
        # A directory where the file should go cannot be opened for writing
        destination = tmp_path / "example-1.0.jar"
        destination.mkdir()

        with pytest.raises(DownloadError) as exc_info:
            download_and_verify(registry, file, destination)

        assert exc_info.value.kind is ErrorKind.DOWNLOAD
