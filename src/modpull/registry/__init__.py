"""Registry access for modpull.

The registry is an HTTP JSON API exposing ``/project/<id>`` and
``/version/<id>`` plus plain artifact URLs.
"""

from modpull.registry.client import DEFAULT_BASE_URL, RegistryClient

__all__ = [
    "DEFAULT_BASE_URL",
    "RegistryClient",
]
