"""
services/exceptions.py – Structured custom exception hierarchy for BoardSearch.

All service-level errors derive from BoardSearchError so callers can catch
broadly or specifically depending on context.
"""

from typing import Optional


class BoardSearchError(Exception):
    """Base class for all BoardSearch exceptions."""


class ConfigError(BoardSearchError):
    """Raised when a configuration value is missing or out of range."""


class CatalogError(BoardSearchError):
    """Raised when a catalogue query cannot be completed."""


class CatalogNetworkError(CatalogError):
    """Raised on transport failures (DNS, connection reset, timeout…)."""


class CatalogParseError(CatalogError):
    """Raised when the catalogue response is not a usable XML document."""


class CatalogHTTPError(CatalogError):
    """
    Raised when the catalogue answers with a non-success HTTP status.

    Attributes
    ----------
    status_code : HTTP status returned by the service.
    url         : Requested URL, when known.
    """

    def __init__(self, status_code: int, url: Optional[str] = None) -> None:
        self.status_code = status_code
        self.url = url
        where = f" for {url}" if url else ""
        super().__init__(f"Catalogue server returned HTTP {status_code}{where}.")
