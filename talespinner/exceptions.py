"""Exceptions raised by TaleSpinner."""


class TaleSpinnerError(Exception):
    """Base exception for TaleSpinner."""
    pass


class ConfigurationError(TaleSpinnerError):
    """Raised when settings are missing or invalid."""
    pass


class APIError(TaleSpinnerError):
    """Raised when a model API call fails."""
    pass


class StructuredOutputError(TaleSpinnerError):
    """Raised when a model response does not match the requested schema."""
    pass


class FileOperationError(TaleSpinnerError):
    """Raised when file operations fail."""
    pass
