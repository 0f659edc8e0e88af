"""Custom exceptions for OutlineLens.

This module defines a hierarchy of exceptions for better error handling
and debugging throughout the OutlineLens system.

Usage:
    from outline_lens.core.exceptions import OutlineError, UnknownFilterError

    try:
        outline = await provider.get_outline(document)
    except OutlineError as e:
        print(f"Failed to outline {e.filepath}: {e.details}")
"""


class OutlineLensException(Exception):
    """Base exception for all OutlineLens operations.

    All custom exceptions in OutlineLens inherit from this class,
    allowing for broad exception catching when needed.
    """
    pass


class OutlineError(OutlineLensException):
    """Raised when an outline provider cannot build an outline.

    Attributes:
        filepath: Path to the document that failed to outline
        language: Detected language of the document
        details: Specific error details
    """

    def __init__(self, filepath: str, language: str, details: str):
        self.filepath = filepath
        self.language = language
        self.details = details
        super().__init__(f"Failed to outline {filepath} ({language}): {details}")


class UnknownFilterError(OutlineLensException):
    """Raised when a quick filter id is not part of the filter catalog.

    Attributes:
        filter_id: The id that was requested
    """

    def __init__(self, filter_id: str):
        self.filter_id = filter_id
        super().__init__(f"Unknown quick filter: {filter_id!r}")


class ConfigurationError(OutlineLensException):
    """Raised when configuration is invalid.

    This covers failures related to:
    - Negative debounce delays
    - Unknown languages requested from the language tables
    """
    pass
