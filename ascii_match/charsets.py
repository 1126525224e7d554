"""
Character Set Definitions and Alphabet Cache

Named candidate character sets for signature matching:
- ascii_standard: 95 printable ASCII characters (the default)
- ascii_dense: Tone ramp subset
- ascii_structural: Edge/line-friendly subset
- ascii_heavy: Bold, high-contrast subset
- ansi_blocks / ansi_lines / ansi_full: Block and box-drawing graphics

Any other string is used literally as the candidate characters. Built
alphabets are cached per font, glyph height and character set.
"""

from functools import lru_cache
from typing import Dict, List, Optional

from .fonts import PillowGlyphFont
from .intensity import GLYPH_HEIGHT, Alphabet, char_intensities


# ============================================================================
# CHARACTER SET DEFINITIONS
# ============================================================================

# Standard 95 printable ASCII (0x20-0x7E)
ASCII_STANDARD = (
    " !\"#$%&'()*+,-./0123456789:;<=>?"
    "@ABCDEFGHIJKLMNOPQRSTUVWXYZ[\\]^_"
    "`abcdefghijklmnopqrstuvwxyz{|}~"
)

# Dense characters sorted by visual density
ASCII_DENSE = " .'`^\",:;Il!i><~+_-?][}{1)(|/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"

# Structural characters - good for edges and lines
ASCII_STRUCTURAL = " .-_=+|/\\<>()[]{}#@"

# Heavy/Bold characters for clearer boundaries and high contrast
ASCII_HEAVY = " @#%8&WM$B0OQZEX"

# ANSI block graphics (extended ASCII / Unicode)
ANSI_BLOCKS = " ░▒▓█▄▀▌▐"

# ANSI line drawing
ANSI_LINES = "╔╗╚╝║═┌┐└┘│─├┤┬┴┼"

# Combined ANSI set
ANSI_FULL = ANSI_BLOCKS + ANSI_LINES

CHARSETS: Dict[str, str] = {
    "ascii_standard": ASCII_STANDARD,
    "ascii_dense": ASCII_DENSE,
    "ascii_structural": ASCII_STRUCTURAL,
    "ascii_heavy": ASCII_HEAVY,
    "ansi_blocks": ANSI_BLOCKS,
    "ansi_lines": ANSI_LINES,
    "ansi_full": ANSI_FULL,
}


def list_charsets() -> List[str]:
    """List all available charset names."""
    return list(CHARSETS)


def resolve_characters(name_or_chars: str) -> str:
    """Characters of a named charset, or the argument itself if unnamed."""
    return CHARSETS.get(name_or_chars, name_or_chars)


# ============================================================================
# ALPHABET FACTORY
# ============================================================================

# Most recently used alphabets kept per (font, height, characters, strict)
ALPHABET_CACHE_SIZE = 16


@lru_cache(maxsize=ALPHABET_CACHE_SIZE)
def _build_alphabet(
    font_path: Optional[str],
    glyph_height: int,
    characters: str,
    strict: bool,
) -> Alphabet:
    font = PillowGlyphFont.from_path(font_path, size=glyph_height)
    return char_intensities(characters, font, height=glyph_height, strict=strict)


def get_alphabet(
    charset: str = "ascii_standard",
    font_path: Optional[str] = None,
    glyph_height: int = GLYPH_HEIGHT,
    strict: bool = True,
) -> Alphabet:
    """
    Get the matching alphabet for a charset and font, building it once
    (up to ALPHABET_CACHE_SIZE alphabets are kept).

    Args:
        charset: Charset name (see list_charsets()) or literal characters
        font_path: Font file, or None to search common monospace fonts
        glyph_height: Glyph raster height
        strict: Reject glyphs with undefined signatures instead of dropping them

    Returns:
        Alphabet instance
    """
    return _build_alphabet(font_path, glyph_height, resolve_characters(charset), strict)
