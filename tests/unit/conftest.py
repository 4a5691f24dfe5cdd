"""Shared fixtures for unit tests: an in-memory registry."""

from __future__ import annotations

import hashlib
import io
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

import pytest

from modpull.core.models import ProjectDescriptor, VersionDescriptor


class FakeRegistry:
    """Stands in for RegistryClient and records every call."""

    def __init__(
        self,
        project: Dict[str, Any],
        versions: Optional[Dict[str, Dict[str, Any]]] = None,
        artifacts: Optional[Dict[str, bytes]] = None,
    ) -> None:
        self.project = project
        self.versions = versions or {}
        self.artifacts = artifacts or {}
        self.project_fetches: List[str] = []
        self.version_fetches: List[str] = []
        self.opened_urls: List[str] = []

    def fetch_project(self, project_id: str) -> ProjectDescriptor:
        self.project_fetches.append(project_id)
        return ProjectDescriptor.from_dict(self.project, project_id=project_id)

    def fetch_version(self, version_id: str) -> VersionDescriptor:
        self.version_fetches.append(version_id)
        return VersionDescriptor.from_dict(self.versions[version_id])

    @contextmanager
    def open_stream(self, url: str) -> Iterator[io.BytesIO]:
        self.opened_urls.append(url)
        yield io.BytesIO(self.artifacts[url])


def make_file(filename: str, content: bytes, url: Optional[str] = None) -> Dict[str, Any]:
    return {
        "filename": filename,
        "url": url or f"https://cdn.example.com/{filename}",
        "hashes": {
            "sha512": hashlib.sha512(content).hexdigest(),
            "sha1": hashlib.sha1(content).hexdigest(),
        },
        "primary": True,
        "size": len(content),
    }


def make_version(
    version_id: str,
    game_versions: List[str],
    loaders: Optional[List[str]] = None,
    files: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return {
        "id": version_id,
        "version_number": version_id,
        "game_versions": game_versions,
        "loaders": loaders if loaders is not None else ["fabric"],
        "files": files if files is not None else [],
    }


def make_project(
    versions: List[str],
    game_versions: List[str],
    loaders: Optional[List[str]] = None,
    server_side: str = "required",
) -> Dict[str, Any]:
    return {
        "id": "AANobbMI",
        "slug": "example-mod",
        "title": "Example Mod",
        "server_side": server_side,
        "loaders": loaders if loaders is not None else ["fabric"],
        "game_versions": game_versions,
        "versions": versions,
        "license": {"id": "MIT", "name": "MIT License"},
    }


@pytest.fixture
def registry_factory() -> Callable[..., FakeRegistry]:
    return FakeRegistry


@pytest.fixture
def file_factory() -> Callable[..., Dict[str, Any]]:
    return make_file


@pytest.fixture
def version_factory() -> Callable[..., Dict[str, Any]]:
    return make_version


@pytest.fixture
def project_factory() -> Callable[..., Dict[str, Any]]:
    return make_project


@pytest.fixture
def monotonic_registry() -> FakeRegistry:
    """Four versions, oldest first, supporting [1.0], [1.0], [1.1], [1.2]."""
    versions = {
        "v1": make_version("v1", ["1.0"]),
        "v2": make_version("v2", ["1.0"]),
        "v3": make_version("v3", ["1.1"]),
        "v4": make_version("v4", ["1.2"]),
    }
    project = make_project(
        versions=["v1", "v2", "v3", "v4"],
        game_versions=["1.0", "1.1", "1.2", "1.5"],
    )
    return FakeRegistry(project, versions)
