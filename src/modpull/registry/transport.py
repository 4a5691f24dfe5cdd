"""Certificate-aware HTTP(S) opening for registry requests.

Uses certifi's CA bundle so verification works the same in standalone
builds where the system certificate store is not reachable.
"""

from __future__ import annotations

import ssl
from typing import Dict, Optional
from urllib.request import Request, urlopen

import certifi


def get_ssl_context() -> ssl.SSLContext:
    """Get an SSL context that uses certifi's CA bundle.

    Returns:
        An SSL context configured with certifi's CA certificates.
    """
    return ssl.create_default_context(cafile=certifi.where())


def build_request(url: str, user_agent: str, accept: Optional[str] = None) -> Request:
    """Build a GET request carrying the client-agent header."""
    headers: Dict[str, str] = {"User-Agent": user_agent}
    if accept:
        headers["Accept"] = accept
    return Request(url, headers=headers, method="GET")


def secure_urlopen(
    url: str,
    user_agent: str,
    timeout: Optional[float] = 30.0,
    accept: Optional[str] = None,
    allow_insecure: bool = False,
):
    """Open a URL with proper SSL certificate verification.

    Args:
        url: The URL to open.
        user_agent: Value for the User-Agent header.
        timeout: Connection timeout in seconds.
        accept: Optional Accept header value.
        allow_insecure: Permit plain ``http://`` URLs (local mirrors).

    Returns:
        A file-like object for reading the response.

    Raises:
        URLError: If the URL cannot be opened.
        ValueError: If the URL scheme is not allowed.
    """
    allowed = ("https://", "http://") if allow_insecure else ("https://",)
    if not url.startswith(allowed):
        raise ValueError(f"Only HTTPS URLs are supported: {url}")

    request = build_request(url, user_agent, accept=accept)
    if url.startswith("https://"):
        return urlopen(request, timeout=timeout, context=get_ssl_context())  # nosec B310
    return urlopen(request, timeout=timeout)  # nosec B310
