from typing import Optional


class MediaResolverError(Exception):
    """Base exception for the media resolver."""


class ConfigurationError(MediaResolverError):
    """Raised when resolver configuration is missing or invalid."""


class RecordValidationError(MediaResolverError):
    """Raised when an import row cannot be turned into a record."""

    def __init__(self, message: str, row_index: Optional[int] = None):
        super().__init__(message)
        self.row_index = row_index
