"""
Signature-Matching Image-to-Text Renderer

Renders a raster image as text art by matching 3x3 image cells against
five-region darkness signatures measured from real font glyphs:
- Glyph signatures (left/right/top/bottom/middle coverage) per character
- Contrast/gamma tone curve for image cells
- Weighted nearest-signature matching
- Plain text or rendered bitmap output
"""

__version__ = "0.1.0"

from .charsets import get_alphabet, list_charsets
from .config import RenderConfig
from .errors import (
    AlphabetAllBlank,
    AsciiMatchError,
    Incomplete,
    Invalid,
    InvalidGlyphSignature,
    ParserError,
    SinkError,
)
from .intensity import Alphabet, Intensity, char_intensities
from .matcher import best_match
from .render import asciify, asciify_to_string, image_to_ascii, render_image
from .tone import ToneCurve

__all__ = [
    "Alphabet",
    "AlphabetAllBlank",
    "AsciiMatchError",
    "Incomplete",
    "Intensity",
    "Invalid",
    "InvalidGlyphSignature",
    "ParserError",
    "RenderConfig",
    "SinkError",
    "ToneCurve",
    "asciify",
    "asciify_to_string",
    "best_match",
    "char_intensities",
    "get_alphabet",
    "image_to_ascii",
    "list_charsets",
    "render_image",
]
