"""Error types raised while converting one archive."""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for failures of a single archive conversion."""


class FetchError(ConversionError):
    """The archive could not be retrieved."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ExtractionError(ConversionError):
    """The archive is corrupt or in an unsupported format."""


class ParseError(ConversionError):
    """A shapefile component, its encoding, or its projection is malformed."""


class WriteError(ConversionError):
    """The output file could not be written."""
