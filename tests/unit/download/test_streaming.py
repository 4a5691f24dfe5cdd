"""Tests for the chunked fan-out copy."""

from __future__ import annotations

import hashlib
import io
from typing import List

import pytest

from modpull.download.streaming import DigestSink, FileSink, fan_out


class RecordingSink:
    def __init__(self, name: str, log: List[tuple]) -> None:
        self.name = name
        self.log = log

    def write(self, chunk: bytes) -> None:
        self.log.append((self.name, chunk))


class CountingReader(io.BytesIO):
    """BytesIO that records the size requested by each read."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.requests: List[int] = []

    def read(self, size: int = -1) -> bytes:
        self.requests.append(size)
        return super().read(size)


class TestFanOut:
    """Tests for fan_out."""

    def test_streamed_digest_matches_direct_digest(self) -> None:
        data = bytes(range(256)) * 1000 + b"tail"
        digest = DigestSink("sha512")
        target = io.BytesIO()

        total = fan_out(io.BytesIO(data), [FileSink(target), digest], chunk_size=4096)

        assert total == len(data)
        assert target.getvalue() == data
        assert digest.hexdigest() == hashlib.sha512(data).hexdigest()

    def test_every_sink_sees_each_chunk_in_order(self) -> None:
        log: List[tuple] = []
        sinks = [RecordingSink("file", log), RecordingSink("digest", log)]

        fan_out(io.BytesIO(b"abcdefg"), sinks, chunk_size=3)

        assert log == [
            ("file", b"abc"), ("digest", b"abc"),
            ("file", b"def"), ("digest", b"def"),
            ("file", b"g"), ("digest", b"g"),
        ]

    def test_reads_are_bounded(self) -> None:
        reader = CountingReader(b"x" * 10_000)

        fan_out(reader, [DigestSink("sha1")], chunk_size=1024)

        assert set(reader.requests) == {1024}

    def test_empty_stream(self) -> None:
        digest = DigestSink("sha1")

        assert fan_out(io.BytesIO(b""), [digest]) == 0
        assert digest.hexdigest() == hashlib.sha1(b"").hexdigest()

    def test_rejects_non_positive_chunk_size(self) -> None:
        with pytest.raises(ValueError):
            fan_out(io.BytesIO(b"data"), [], chunk_size=0)
