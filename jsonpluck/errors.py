"""
Errors - Exception types raised while extracting array items.

All errors propagate to the caller; nothing here is retried.
"""

from typing import Optional


class JsonPluckError(Exception):
    """Base class for all errors raised by jsonpluck."""


class ConfigError(JsonPluckError, ValueError):
    """Raised at construction time for a malformed path or option."""


class TokenizeError(JsonPluckError, ValueError):
    """
    Raised when the input is not well-formed JSON.

    Attributes:
        position: Absolute byte offset in the input where the problem was found.
        events: Boundary events found in the failing chunk before the problem.
    """

    def __init__(self, message: str, position: Optional[int] = None):
        if position is not None:
            message = f"{message} at byte {position}"
        super().__init__(message)
        self.position = position
        self.events = []


class DecodeError(JsonPluckError, ValueError):
    """
    Raised when an assembled item or the remainder fails to decode.

    Attributes:
        raw: The bytes that could not be decoded.
    """

    def __init__(self, message: str, raw: bytes):
        super().__init__(message)
        self.raw = raw


class StreamClosedError(JsonPluckError):
    """Raised on write() or end() after the extractor has closed or failed."""
