"""
Render Configuration

A single dataclass holds every run-time setting. The CLI builds one from
argparse arguments; library callers construct it directly.
"""

import argparse
from dataclasses import dataclass
from typing import Optional, Tuple

from .charsets import resolve_characters
from .colour import RgbTuple, parse_rgb
from .intensity import GLYPH_HEIGHT
from .sinks import infer_sink_kind, SinkKind


@dataclass
class RenderConfig:
    """Configuration for image-to-text rendering."""
    output_width: int = 80                 # Output width in characters
    output_height: Optional[int] = None    # Lines (derived from aspect ratio if None)
    contrast: float = 1.0                  # Tone curve contrast (1.0 = none)
    gamma: float = 1.0                     # Tone curve gamma (1.0 = none)
    charset: str = "ascii_standard"        # Charset name or literal characters
    font_path: Optional[str] = None        # Font for glyph signatures (and image output)
    glyph_height: int = GLYPH_HEIGHT       # Glyph raster height for signatures
    strict: bool = True                    # Reject NaN signatures instead of dropping them
    equalize: bool = False                 # CLAHE contrast enhancement before sampling
    output: Optional[str] = None           # Output path (stdout if None)
    output_format: str = "auto"            # "auto", "text" or "image"
    text_scale: float = 16.0               # Font size for image output
    line_height: Optional[float] = None    # Pixels per line for image output
    text_colour: str = "000000"            # Hex RGB text colour for image output
    background_colour: str = "ffffff"      # Hex RGB background for image output

    @property
    def characters(self) -> str:
        return resolve_characters(self.charset)

    @property
    def sink_kind(self) -> SinkKind:
        return infer_sink_kind(self.output, self.output_format)

    @property
    def text_rgb(self) -> RgbTuple:
        return parse_rgb(self.text_colour)

    @property
    def background_rgb(self) -> RgbTuple:
        return parse_rgb(self.background_colour)

    def validate(self) -> "RenderConfig":
        """
        Check values that would otherwise fail deep inside rendering.

        Raises:
            ValueError: On a bad size, format, charset, or colour
        """
        if self.output_width <= 0:
            raise ValueError(f"output_width must be positive, got {self.output_width}")
        if self.output_height is not None and self.output_height <= 0:
            raise ValueError(f"output_height must be positive, got {self.output_height}")
        if self.glyph_height <= 0:
            raise ValueError(f"glyph_height must be positive, got {self.glyph_height}")
        if self.text_scale <= 0:
            raise ValueError(f"text_scale must be positive, got {self.text_scale}")
        if not self.characters:
            raise ValueError("charset is empty")
        if self.sink_kind == "image":
            if self.output is None:
                raise ValueError("image output requires an output path")
            # raises ParserError, a ValueError
            parse_rgb(self.text_colour)
            parse_rgb(self.background_colour)
        return self

    def grid_size(self, image_size: Tuple[int, int]) -> Tuple[int, int]:
        """
        Output grid (width, height) for a source image size.

        Without an explicit height, characters are assumed twice as tall as
        they are wide.
        """
        image_width, image_height = image_size
        width = self.output_width
        if self.output_height is not None:
            return width, self.output_height
        height = (image_height * width) // image_width // 2
        return width, max(height, 1)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RenderConfig":
        """Build a config from parsed CLI arguments."""
        return cls(
            output_width=args.width,
            output_height=args.height,
            contrast=args.contrast,
            gamma=args.gamma,
            charset=args.charset,
            font_path=args.font,
            strict=not args.lenient,
            equalize=args.equalize,
            output=args.output,
            output_format=args.format,
            text_scale=args.text_scale,
            line_height=args.line_height,
            text_colour=args.text_colour,
            background_colour=args.background_colour,
        )
