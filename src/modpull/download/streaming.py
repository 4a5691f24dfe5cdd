"""Single-pass fan-out of a byte stream to several consumers.

A bounded chunk is read once from the source and handed to every sink, in
order, before the next chunk is read. Nothing holds more than one chunk.
"""

from __future__ import annotations

import hashlib
from typing import BinaryIO, Protocol, Sequence

DEFAULT_CHUNK_SIZE = 64 * 1024


class ChunkSink(Protocol):
    """Consumer of stream chunks."""

    def write(self, chunk: bytes) -> object:
        ...


class FileSink:
    """Writes chunks to an open binary file."""

    def __init__(self, handle: BinaryIO) -> None:
        self._handle = handle

    def write(self, chunk: bytes) -> None:
        self._handle.write(chunk)


class DigestSink:
    """Feeds chunks into a hashlib digest."""

    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        self._hasher = hashlib.new(algorithm)

    def write(self, chunk: bytes) -> None:
        self._hasher.update(chunk)

    def hexdigest(self) -> str:
        return self._hasher.hexdigest()


def fan_out(
    source: BinaryIO,
    sinks: Sequence[ChunkSink],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Copy ``source`` into every sink in one pass.

    Args:
        source: Readable binary stream.
        sinks: Consumers, called in order for each chunk.
        chunk_size: Maximum bytes read per iteration.

    Returns:
        Total number of bytes read.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    total = 0
    while True:
        chunk = source.read(chunk_size)
        if not chunk:
            break
        for sink in sinks:
            sink.write(chunk)
        total += len(chunk)
    return total
