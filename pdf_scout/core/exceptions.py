"""
Custom exception hierarchy for PDF Scout.

Provides specific exception types for the failure modes of the pipeline:
configuration, filesystem access, text extraction, cache corruption,
unmet search preconditions and superseded searches.
"""


class ScoutError(Exception):
    """Base exception for all PDF Scout errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ScoutError):
    """Raised when configuration is invalid or missing."""
    pass


class FilesystemError(ScoutError):
    """Raised when a directory or file cannot be read or written."""

    def __init__(self, message: str, path: str = None, details: dict = None):
        """
        Initialize filesystem error.

        Args:
            message: Error description.
            path: Path that could not be accessed.
            details: Additional context.
        """
        super().__init__(message, details)
        self.path = path


class ExtractionError(ScoutError):
    """Raised when PDF text extraction fails."""

    def __init__(self, message: str, filepath: str = None, details: dict = None):
        """
        Initialize extraction error.

        Args:
            message: Error description.
            filepath: Path to the problematic PDF file.
            details: Additional context.
        """
        super().__init__(message, details)
        self.filepath = filepath


class CacheCorruptionError(ScoutError):
    """Raised when a persisted cache or index document fails to parse."""

    def __init__(self, message: str, path: str = None, details: dict = None):
        super().__init__(message, details)
        self.path = path


class PreconditionNotMet(ScoutError):
    """Raised when a query is too short to run a search."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        super().__init__(message, details)
        self.query = query


class SearchCancelled(ScoutError):
    """Raised when an in-flight search is superseded by a newer one."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        super().__init__(message, details)
        self.query = query


if __name__ == "__main__":
    try:
        raise ConfigurationError("Config file not found", {"path": "/config/config.json"})
    except ScoutError as e:
        print(f"Caught: {e.__class__.__name__}: {e.message}")
        print(f"Details: {e.details}")

    try:
        raise ExtractionError("pdftotext exited with status 1", filepath="/docs/test.pdf")
    except ExtractionError as e:
        print(f"Extraction failed for: {e.filepath}")
