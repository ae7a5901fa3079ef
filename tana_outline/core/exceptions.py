"""Custom exceptions for the converter."""


class ConversionError(Exception):
    """Base exception for conversion errors."""
    pass


class InvalidPathError(ConversionError):
    """Raised when the input file or output directory is not acceptable."""
    pass


class FileAccessError(ConversionError):
    """Raised when a file cannot be read or written."""
    pass


class MalformedExportError(ConversionError):
    """Raised when the export breaks a convention the converter relies on."""
    pass
