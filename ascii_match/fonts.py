"""
Font Loading and Glyph Rasterization

Wraps a Pillow FreeType font in the small capability the signature builder
needs: ascent, advance width, a visible bounding box, and per-pixel coverage
samples in absolute glyph coordinates (origin at the layout point, baseline
at y = ascent).
"""

from typing import Dict, Iterator, Optional, Protocol, Tuple
import numpy as np
from PIL import Image, ImageDraw, ImageFont


BoundingBox = Tuple[int, int, int, int]

# Monospace fonts tried in order when no font path is configured
DEFAULT_FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",  # Linux
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",  # Arch
    "/System/Library/Fonts/Menlo.ttc",  # macOS
    "/System/Library/Fonts/Monaco.dfont",  # macOS fallback
    "Consolas",  # Windows
]


class GlyphFont(Protocol):
    """Font capability consumed by the signature builder."""

    @property
    def ascent(self) -> float:
        ...

    def advance_width(self, char: str) -> float:
        ...

    def bounding_box(self, char: str) -> Optional[BoundingBox]:
        """Pixel bounding box (x0, y0, x1, y1), or None if nothing is drawn."""
        ...

    def coverage(self, char: str) -> Iterator[Tuple[int, int, float]]:
        """Yield (x, y, coverage) for every pixel of the bounding box."""
        ...


def fit_line_height(font: ImageFont.FreeTypeFont, height: float) -> ImageFont.FreeTypeFont:
    """
    Rescale a font so that ascent + descent spans at most height pixels.

    Pillow sizes fonts by em, which leaves room above and below the line;
    glyph regions are measured against the full line height instead.
    """
    ascent, descent = font.getmetrics()
    size = font.size * height / (ascent + descent)
    fitted = font.font_variant(size=size)

    # FreeType rounds metrics to whole pixels
    while sum(fitted.getmetrics()) > height and size > 1:
        size -= 0.25
        fitted = font.font_variant(size=size)
    return fitted


def load_font(path: Optional[str] = None, size: float = 36) -> ImageFont.FreeTypeFont:
    """
    Load a TrueType font, searching common monospace fonts when path is None.

    The font is scaled so that its line (ascent + descent) is size pixels.

    Args:
        path: Font file path (or name Pillow can resolve)
        size: Line height in pixels

    Returns:
        FreeTypeFont instance

    Raises:
        OSError: If an explicit path cannot be loaded
    """
    if path is not None:
        return fit_line_height(ImageFont.truetype(path, size), size)

    for font_name in DEFAULT_FONT_PATHS:
        try:
            return fit_line_height(ImageFont.truetype(font_name, size), size)
        except (OSError, IOError):
            continue

    # Pillow's bundled font; FreeType-backed when size is given
    return fit_line_height(ImageFont.load_default(size=size), size)


class PillowGlyphFont:
    """
    GlyphFont backed by a Pillow FreeTypeFont.

    Each glyph is drawn once with anchor "la" (left, ascender) and the
    coverage array is kept for later lookups.

    Example:
        >>> font = PillowGlyphFont(load_font(size=36))
        >>> alphabet = char_intensities("#@%", font)
    """

    def __init__(self, font: ImageFont.FreeTypeFont):
        self.font = font
        self._rasters: Dict[str, Tuple[Optional[BoundingBox], np.ndarray]] = {}

    @classmethod
    def from_path(cls, path: Optional[str] = None, size: float = 36) -> "PillowGlyphFont":
        return cls(load_font(path, size))

    @property
    def ascent(self) -> float:
        ascent, _ = self.font.getmetrics()
        return float(ascent)

    def advance_width(self, char: str) -> float:
        return float(self.font.getlength(char))

    def _rasterize(self, char: str) -> Tuple[Optional[BoundingBox], np.ndarray]:
        if char not in self._rasters:
            x0, y0, x1, y1 = self.font.getbbox(char, anchor="la")
            width = max(x1 - x0, 1)
            height = max(y1 - y0, 1)

            img = Image.new("L", (width, height), color=0)
            draw = ImageDraw.Draw(img)
            draw.text((-x0, -y0), char, fill=255, font=self.font, anchor="la")

            ink = img.getbbox()
            if ink is None:
                self._rasters[char] = (None, np.zeros((0, 0), dtype=np.uint8))
            else:
                left, top, right, bottom = ink
                box = (x0 + left, y0 + top, x0 + right, y0 + bottom)
                self._rasters[char] = (box, np.array(img.crop(ink)))

        return self._rasters[char]

    def bounding_box(self, char: str) -> Optional[BoundingBox]:
        box, _ = self._rasterize(char)
        return box

    def coverage(self, char: str) -> Iterator[Tuple[int, int, float]]:
        box, raster = self._rasterize(char)
        if box is None:
            return
        x0, y0 = box[0], box[1]
        rows, cols = raster.shape
        for row in range(rows):
            for col in range(cols):
                yield x0 + col, y0 + row, float(raster[row, col]) / 255.0
