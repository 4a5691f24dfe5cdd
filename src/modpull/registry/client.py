"""Registry client facade.

Wraps the three outbound calls modpull makes: fetching a project, fetching
a single version and opening an artifact byte stream. Every request carries
the configured client-agent header. Failures of any kind surface as
``RegistryError`` with the original exception chained.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, BinaryIO, Dict, Iterator, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote

from modpull import __version__
from modpull.core.errors import RegistryError
from modpull.core.logging import get_logger
from modpull.core.models import ProjectDescriptor, VersionDescriptor
from modpull.registry.transport import secure_urlopen

LOGGER = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.modrinth.com/v2"
DEFAULT_USER_AGENT = f"modpull/{__version__}"
DEFAULT_TIMEOUT = 30.0


class RegistryClient:
    """Blocking client for a Modrinth-style registry.

    Args:
        base_url: Registry API root, without trailing slash.
        user_agent: Identifying client-agent header value.
        timeout: Per-request timeout in seconds.
        allow_insecure: Permit plain ``http://`` URLs.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        allow_insecure: bool = False,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.allow_insecure = allow_insecure

    def project_url(self, project_id: str) -> str:
        return f"{self.base_url}/project/{quote(project_id, safe='')}"

    def version_url(self, version_id: str) -> str:
        return f"{self.base_url}/version/{quote(version_id, safe='')}"

    def fetch_project(self, project_id: str) -> ProjectDescriptor:
        """Fetch the descriptor of a project.

        Raises:
            RegistryError: On transport, HTTP or decoding failure.
        """
        url = self.project_url(project_id)
        data = self._get_json(url, resource=f"project {project_id}")
        try:
            return ProjectDescriptor.from_dict(data, project_id=project_id)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise RegistryError(f"Malformed descriptor for project {project_id}: {e!r}", url=url) from e

    def fetch_version(self, version_id: str) -> VersionDescriptor:
        """Fetch the descriptor of a single version.

        Raises:
            RegistryError: On transport, HTTP or decoding failure.
        """
        url = self.version_url(version_id)
        data = self._get_json(url, resource=f"version {version_id}")
        try:
            return VersionDescriptor.from_dict(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise RegistryError(f"Malformed descriptor for version {version_id}: {e!r}", url=url) from e

    @contextmanager
    def open_stream(self, url: str) -> Iterator[BinaryIO]:
        """Open an artifact URL as a lazily readable byte stream.

        The response body is not buffered; callers read it in chunks.

        Raises:
            RegistryError: If the URL cannot be opened.
        """
        LOGGER.debug(f"GET {url} (stream)")
        response = self._open(url, resource=f"artifact {url}")
        try:
            yield response
        finally:
            response.close()

    def _open(self, url: str, resource: str, accept: Optional[str] = None):
        try:
            return secure_urlopen(
                url,
                self.user_agent,
                timeout=self.timeout,
                accept=accept,
                allow_insecure=self.allow_insecure,
            )
        except HTTPError as e:
            if e.code == 404:
                raise RegistryError(f"{resource} not found ({url})", url=url) from e
            raise RegistryError(
                f"Registry returned HTTP {e.code} for {resource} ({url})", url=url
            ) from e
        except (URLError, OSError) as e:
            raise RegistryError(f"Failed to reach registry for {resource}: {e}", url=url) from e
        except ValueError as e:
            raise RegistryError(str(e), url=url) from e

    def _get_json(self, url: str, resource: str) -> Dict[str, Any]:
        LOGGER.debug(f"GET {url}")
        response = self._open(url, resource=resource, accept="application/json")
        try:
            with response:
                body = response.read()
        except OSError as e:
            raise RegistryError(f"Failed to read {resource}: {e}", url=url) from e

        try:
            data = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RegistryError(f"Invalid JSON for {resource}: {e}", url=url) from e

        if not isinstance(data, dict):
            raise RegistryError(
                f"Expected a JSON object for {resource}, got {type(data).__name__}", url=url
            )
        return data
