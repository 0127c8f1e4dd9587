"""
Exception types for the canonical message codec.
"""

from typing import Optional


class CanonicalizationError(Exception):
    """
    Base class for codec failures.

    Fields:
        stage: Pipeline stage that failed ("parse" or "extract")
        offset: Byte offset of the offending input, if known
    """

    stage = "codec"

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset

    def __str__(self) -> str:
        if self.offset is None:
            return f"{self.stage}: {self.message}"
        return f"{self.stage}: {self.message} (at byte {self.offset})"


class EmptyInputError(CanonicalizationError):
    """Raised when there are no bytes to parse."""
    stage = "parse"


class MalformedJSONError(CanonicalizationError):
    """Raised when input bytes are not a valid JSON value."""
    stage = "parse"


class SignatureFieldMissingError(CanonicalizationError):
    """Raised when no top-level signature field is present."""
    stage = "extract"


class SignatureFieldMalformedError(CanonicalizationError):
    """Raised when the signature field cannot be captured as a quoted string."""
    stage = "extract"


class SignatureFormatError(ValueError):
    """Raised when a signature or feed reference does not follow the <base64>.<tag> format."""
    pass
