"""
Custom Exceptions Module.

This module defines the exceptions raised by the NF-e report pipeline.
The batch driver catches them at the per-document boundary; only a
DirectoryError ends a run.

Exception Hierarchy:
    NFeReportError (base)
    ├── InputError
    │   ├── DirectoryError
    │   └── ParseError
    └── OutputError
        ├── WriteError
        └── ReadError
"""


class NFeReportError(Exception):
    """
    Base exception for all NF-e report errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(NFeReportError):
    """Base exception for input handling errors."""
    pass


class DirectoryError(InputError):
    """
    Raised when the input directory is missing or cannot be listed.

    Example:
        >>> raise DirectoryError("XML", "No such file or directory")
    """

    def __init__(self, directory: str, reason: str = None):
        message = f"Cannot list input directory: {directory}"
        details = {"directory": directory, "reason": reason}
        super().__init__(message, details)


class ParseError(InputError):
    """Raised when a document is unreadable, malformed or structurally broken."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Could not parse document: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(NFeReportError):
    """Base exception for report output errors."""
    pass


class WriteError(OutputError):
    """Raised when the report workbook cannot be written."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to write report: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


class ReadError(OutputError):
    """Raised when an existing report cannot be loaded for appending."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to read existing report: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'NFeReportError',
    'InputError',
    'DirectoryError',
    'ParseError',
    'OutputError',
    'WriteError',
    'ReadError',
]
