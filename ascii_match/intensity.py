"""
Five-Region Intensity Signatures

A signature describes how light or dark each region of a character cell is:

    lt t rt
    l  m  r
    lb b rb

Glyph signatures are measured once from a font (see char_intensities) and
image cell signatures are sampled per output cell (see sampling.py). Both
are compared with Intensity.distance.

The four side regions are tested independently, so a corner pixel counts
towards both of its neighbouring sides. Existing output depends on this
geometry; it is not a true partition.
"""

from dataclasses import dataclass, fields
import math
import warnings
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .errors import AlphabetAllBlank, InvalidGlyphSignature
from .fonts import GlyphFont


# Glyph raster height in pixels. Matching results are tuned against it.
GLYPH_HEIGHT = 36

# The bottom region dominates perceived glyph weight.
BOTTOM_WEIGHT = 3.0


@dataclass(frozen=True)
class Intensity:
    """
    Brightness of the five regions of a glyph or image cell.

    Attributes:
        left, right, top, bottom, middle: Region values, nominally 0-1.
            For alphabet entries 1.0 is fully uncovered and 0.0 maximally
            dark; for raw image samples they are mean pixel brightness.
    """
    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0
    middle: float = 0.0

    def distance(self, other: "Intensity") -> float:
        """Weighted L1 distance, bottom region counted three times."""
        return (
            abs(self.left - other.left)
            + abs(self.right - other.right)
            + abs(self.top - other.top)
            + abs(self.bottom - other.bottom) * BOTTOM_WEIGHT
            + abs(self.middle - other.middle)
        )

    def map(self, func: Callable[[float], float]) -> "Intensity":
        """Return a copy with func applied to every region."""
        return Intensity(
            left=func(self.left),
            right=func(self.right),
            top=func(self.top),
            bottom=func(self.bottom),
            middle=func(self.middle),
        )

    def components(self) -> Tuple[float, float, float, float, float]:
        return (self.left, self.right, self.top, self.bottom, self.middle)

    def nan_region(self) -> Optional[str]:
        """Name of the first not-a-number region, or None."""
        for f in fields(self):
            if math.isnan(getattr(self, f.name)):
                return f.name
        return None

    def has_nan(self) -> bool:
        return self.nan_region() is not None

    @classmethod
    def uniform(cls, value: float) -> "Intensity":
        return cls(value, value, value, value, value)


SPACE_ENTRY = (' ', Intensity.uniform(1.0))
DEFAULT_ENTRY = (' ', Intensity())


class Alphabet:
    """
    Ordered, read-only table of (character, Intensity) entries.

    Order matters: when several entries are equally close to a cell the
    earliest one wins. Duplicate characters are kept as given.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[Tuple[str, Intensity]] = ()):
        self._entries: Tuple[Tuple[str, Intensity], ...] = tuple(entries)

    def __iter__(self) -> Iterator[Tuple[str, Intensity]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Tuple[str, Intensity]:
        return self._entries[index]

    def __bool__(self) -> bool:
        return bool(self._entries)

    @property
    def characters(self) -> str:
        return ''.join(char for char, _ in self._entries)

    def signature(self, char: str) -> Optional[Intensity]:
        """Signature of the first entry for char, if any."""
        for entry_char, intensity in self._entries:
            if entry_char == char:
                return intensity
        return None

    def __repr__(self) -> str:
        return f"Alphabet({self.characters!r})"


# ============================================================================
# SIGNATURE EXTRACTION
# ============================================================================

def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _average(total: float, count: int) -> float:
    # A region with no nominal pixels has no defined average.
    if count == 0:
        return math.nan
    return total / count


def glyph_width(font: GlyphFont, char: str) -> int:
    """Layout width of a glyph placed at x = 0, rounded to whole pixels."""
    return _round_half_away(0.0 + font.advance_width(char))


def accumulate_coverage(
    samples: Iterable[Tuple[int, int, float]],
    width: int,
    height: int = GLYPH_HEIGHT,
) -> Intensity:
    """
    Fold coverage samples into per-region average coverage.

    Args:
        samples: (x, y, coverage) in absolute glyph coordinates
        width: Glyph layout width in pixels
        height: Glyph raster height in pixels

    Returns:
        Raw Intensity where larger values mean more ink
    """
    side_width = width // 3
    top_height = height // 3

    left = right = top = bottom = middle = 0.0
    for x, y, value in samples:
        on_side = False
        if x < side_width:
            left += value
            on_side = True
        if x >= width - side_width:
            right += value
            on_side = True
        if y < top_height:
            top += value
            on_side = True
        if y >= height - top_height:
            bottom += value
            on_side = True
        if not on_side:
            middle += value

    return Intensity(
        left=_average(left, side_width * height),
        right=_average(right, side_width * height),
        top=_average(top, top_height * width),
        bottom=_average(bottom, top_height * width),
        middle=_average(middle, (width - side_width * 2) * (height - top_height * 2)),
    )


def raw_signatures(
    chars: Iterable[str],
    font: GlyphFont,
    height: int = GLYPH_HEIGHT,
) -> List[Tuple[str, Intensity]]:
    """Measure every character that has a visible bounding box."""
    signatures = []
    for char in chars:
        if font.bounding_box(char) is None:
            continue
        width = glyph_width(font, char)
        signatures.append((char, accumulate_coverage(font.coverage(char), width, height)))
    return signatures


def _check_signatures(
    signatures: List[Tuple[str, Intensity]],
    strict: bool,
) -> List[Tuple[str, Intensity]]:
    valid = []
    for char, intensity in signatures:
        region = intensity.nan_region()
        if region is None:
            valid.append((char, intensity))
        elif strict:
            raise InvalidGlyphSignature(char, region)
        else:
            warnings.warn(f"Dropping {char!r}: signature region '{region}' is not a number")
    return valid


def signature_maximum(signatures: Iterable[Tuple[str, Intensity]]) -> float:
    """Largest single region value across all signatures."""
    maximum = 0.0
    for _, intensity in signatures:
        maximum = max(maximum, *intensity.components())
    return maximum


def normalize_signatures(
    signatures: Iterable[Tuple[str, Intensity]],
    maximum: float,
) -> List[Tuple[str, Intensity]]:
    """
    Scale by maximum and invert so that 0.0 is darkest and 1.0 lightest.

    Raises:
        AlphabetAllBlank: If maximum is zero
    """
    if maximum == 0:
        raise AlphabetAllBlank()
    return [
        (char, intensity.map(lambda x: 1.0 - x / maximum))
        for char, intensity in signatures
    ]


def char_intensities(
    chars: Iterable[str],
    font: GlyphFont,
    height: int = GLYPH_HEIGHT,
    strict: bool = True,
) -> Alphabet:
    """
    Build the matching alphabet for a font and candidate characters.

    Characters without a visible glyph are skipped. A synthetic space entry
    (all regions 1.0) is always appended last.

    Args:
        chars: Candidate characters, in tie-breaking order
        font: Font capability rasterizing at the glyph height
        height: Glyph raster height
        strict: Raise on a not-a-number signature instead of dropping it

    Returns:
        Alphabet ready for matching

    Raises:
        AlphabetAllBlank: If no candidate glyph has any coverage
        InvalidGlyphSignature: If a signature is not a number (strict only)
    """
    # Stage 1: measure and find the normalization maximum.
    signatures = _check_signatures(raw_signatures(chars, font, height), strict)
    maximum = signature_maximum(signatures)

    # Stage 2: rescale and invert.
    normalized = _check_signatures(normalize_signatures(signatures, maximum), strict)

    normalized.append(SPACE_ENTRY)
    return Alphabet(normalized)
