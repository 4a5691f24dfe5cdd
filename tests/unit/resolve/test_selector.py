"""Tests for artifact selection."""

from __future__ import annotations

import pytest

from modpull.core.errors import ErrorKind, ResolutionError
from modpull.core.models import VersionDescriptor
from modpull.resolve.selector import select_artifact


class TestSelectArtifact:
    """Tests for select_artifact."""

    def test_selects_jar(self, version_factory, file_factory) -> None:
        version = VersionDescriptor.from_dict(version_factory("v1", ["1.20.1"], files=[
            file_factory("example-sources.zip", b"src"),
            file_factory("example-1.0.jar", b"jar"),
        ]))

        assert select_artifact(version).filename == "example-1.0.jar"

    def test_first_match_wins(self, version_factory, file_factory) -> None:
        version = VersionDescriptor.from_dict(version_factory("v1", ["1.20.1"], files=[
            file_factory("example-1.0.jar", b"a"),
            file_factory("example-1.0-dev.jar", b"b"),
        ]))

        assert select_artifact(version).filename == "example-1.0.jar"

    def test_no_jar_fails(self, version_factory, file_factory) -> None:
        version = VersionDescriptor.from_dict(version_factory("v1", ["1.20.1"], files=[
            file_factory("example.zip", b"zip"),
        ]))

        with pytest.raises(ResolutionError) as exc_info:
            select_artifact(version)

        assert exc_info.value.kind is ErrorKind.NO_INSTALLABLE_ARTIFACT
        assert "example.zip" in str(exc_info.value)

    def test_no_files_fails(self, version_factory) -> None:
        version = VersionDescriptor.from_dict(version_factory("v1", ["1.20.1"]))

        with pytest.raises(ResolutionError):
            select_artifact(version)

    def test_custom_suffix(self, version_factory, file_factory) -> None:
        version = VersionDescriptor.from_dict(version_factory("v1", ["1.20.1"], files=[
            file_factory("example-1.0.jar", b"a"),
            file_factory("pack.mrpack", b"b"),
        ]))

        assert select_artifact(version, suffix=".mrpack").filename == "pack.mrpack"
