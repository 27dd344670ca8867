# utils/errors.py
"""
Errors raised by the reading room core.

All of them are recoverable by the caller. Routes translate them into JSON
error bodies; the message is passed through unchanged so the UI can show it.
"""


class BibleError(Exception):
    """Base exception for reference, navigation and fetch errors."""
    pass


class ParseError(BibleError):
    """Raised when free text cannot be turned into a Reference."""
    pass


class NavigationError(BibleError):
    """Raised when a chapter move would leave the book (chapter < 1)."""
    pass


class FetchError(BibleError):
    """Raised when the Bible text provider fails or returns unusable content."""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        self.status = status
