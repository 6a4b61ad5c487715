"""Exceptions raised while assembling the redirect chain."""

from pathlib import Path


class UrlshortError(Exception):
    """Base class for urlshort errors."""


class ConfigReadError(UrlshortError):
    """The redirects file could not be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read redirects file {path}: {reason}")
        self.path = path


class ParseError(UrlshortError, ValueError):
    """The redirects data is not a valid list of path/url records."""
