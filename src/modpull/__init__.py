"""modpull - resolve and fetch verified mod artifacts from a package registry."""

__version__ = "0.1.0"
