"""Custom exceptions for the enumerator domain."""


class EnumeratorError(Exception):
    """Base exception for this project."""


class ConfigError(EnumeratorError):
    """Raised when runtime configuration is invalid."""


class ExportError(EnumeratorError):
    """Raised when the export file cannot be opened or written."""


class RelayError(EnumeratorError):
    """Raised when a chat relay rejects a notification."""
