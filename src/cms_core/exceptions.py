"""Custom exceptions for the content core's outer layers.

Domain failures are reported as Result values (see domain.result); these
exceptions cover configuration and export I/O.
"""


class CmsError(Exception):
    """Base exception for content core errors."""
    pass


class ConfigurationError(CmsError):
    """Raised when there's an error in configuration."""
    pass


class ExportError(CmsError):
    """Raised when exported report text cannot be written."""
    pass
