"""Verified artifact download."""

from modpull.download.streaming import DEFAULT_CHUNK_SIZE, DigestSink, FileSink, fan_out
from modpull.download.verifier import download_and_verify

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DigestSink",
    "FileSink",
    "download_and_verify",
    "fan_out",
]
