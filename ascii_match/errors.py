"""
Error Types

All errors raised by the matching engine derive from AsciiMatchError so
callers can catch the whole family at once. Resource failures (missing
fonts or images) are not wrapped and propagate as OSError.
"""

from typing import Optional


class AsciiMatchError(Exception):
    """Base class for ascii_match errors."""


class AlphabetAllBlank(AsciiMatchError):
    """Every candidate character rasterized to nothing."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message or "alphabet is blank: no candidate glyph has any coverage"
        )


class InvalidGlyphSignature(AsciiMatchError):
    """A glyph signature contains a not-a-number component."""

    def __init__(self, character: str, region: Optional[str] = None):
        self.character = character
        self.region = region
        detail = f" in region '{region}'" if region else ""
        super().__init__(f"invalid signature for {character!r}{detail}")


class SinkError(AsciiMatchError):
    """An output sink failed to write or save."""


# ============================================================================
# COLOUR PARSING
# ============================================================================

class ParserError(AsciiMatchError, ValueError):
    """Base class for hex colour parsing failures."""


class Incomplete(ParserError):
    """Input ended before a complete two-digit hex unit."""

    def __init__(self, message: str = "Incomplete input"):
        super().__init__(message)


class Invalid(ParserError):
    """Input contains non-hex characters or trailing data."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message)
