from __future__ import annotations


class CatalogResolverError(Exception):
    """Base class for errors surfaced by the resolver."""


class SourceUnavailable(CatalogResolverError):
    """A candidate or embedding source could not be read and no usable cache exists."""

    def __init__(self, source: str, reason: str = "") -> None:
        self.source = source
        self.reason = reason
        message = f"Source '{source}' unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
