"""
Output Sinks

The render loop writes characters through a three-method capability:
write_char, write_newline and flush. Two sinks implement it:

- TextSink: passes characters straight through to a text stream
- ImageSink: lays each line out with a font and blends it onto an RGB canvas,
  saved to disk on flush

create_sink() picks one of the two once, from configuration.
"""

import os
import sys
from typing import Literal, Optional, Protocol, TextIO, Tuple

from PIL import Image, ImageDraw, ImageFont

from .errors import SinkError


RGB = Tuple[int, int, int]
SinkKind = Literal["text", "image"]

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp")


class TextWriter(Protocol):
    """Capability consumed by the render loop. Failures raise SinkError."""

    def write_char(self, char: str) -> None:
        ...

    def write_newline(self) -> None:
        ...

    def flush(self) -> None:
        ...


class TextSink:
    """Writes characters to a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def write_char(self, char: str) -> None:
        try:
            self.stream.write(char)
        except OSError as e:
            raise SinkError(f"Failed to write character: {e}") from e

    def write_newline(self) -> None:
        try:
            self.stream.write("\n")
        except OSError as e:
            raise SinkError(f"Failed to write newline: {e}") from e

    def flush(self) -> None:
        try:
            self.stream.flush()
        except OSError as e:
            raise SinkError(f"Failed to flush stream: {e}") from e


class ImageSink:
    """
    Renders text onto a bitmap canvas.

    The canvas holds width x height character cells. A cell is as wide as
    the font's space advance and line_height pixels tall. Characters are
    buffered until write_newline, which draws the whole line.

    Example:
        >>> sink = ImageSink("out.png", font, width=80, height=40)
        >>> asciify(sink, raster, alphabet)
    """

    def __init__(
        self,
        path: str,
        font: ImageFont.FreeTypeFont,
        width: int,
        height: int,
        line_height: Optional[float] = None,
        text_colour: RGB = (0, 0, 0),
        background_colour: RGB = (255, 255, 255),
    ):
        """
        Args:
            path: Where flush() saves the canvas
            font: Font at the output text scale
            width: Canvas width in characters
            height: Canvas height in lines
            line_height: Pixels per line (default: font ascent + descent)
            text_colour: RGB text colour
            background_colour: RGB fill colour
        """
        ascent, descent = font.getmetrics()
        character_width = font.getlength(" ")

        self.path = path
        self.font = font
        self.text_colour = tuple(text_colour)
        self.ascent = float(ascent)
        self.line_height = float(line_height if line_height is not None else ascent + descent)

        canvas_width = max(round(width * character_width), 1)
        canvas_height = max(round(height * self.line_height), 1)
        self.canvas = Image.new("RGB", (canvas_width, canvas_height), color=tuple(background_colour))
        self._draw = ImageDraw.Draw(self.canvas)

        self.current_line: list = []
        self.current_y = 0.0

    def _draw_current_line(self):
        if not self.current_line:
            return
        # Baseline sits one ascent below the top of the line
        position = (0, self.current_y + self.ascent)
        self._draw.text(
            position,
            "".join(self.current_line),
            fill=self.text_colour,
            font=self.font,
            anchor="ls",
        )

    def write_char(self, char: str) -> None:
        self.current_line.append(char)

    def write_newline(self) -> None:
        self._draw_current_line()
        self.current_y += self.line_height
        self.current_line.clear()

    def flush(self) -> None:
        try:
            self.canvas.save(self.path)
        except (OSError, ValueError) as e:
            raise SinkError(f"Failed to save image {self.path}: {e}") from e


def infer_sink_kind(output: Optional[str], output_format: str = "auto") -> SinkKind:
    """Resolve "auto" to "image" for image file extensions, else "text"."""
    if output_format in ("text", "image"):
        return output_format
    if output_format != "auto":
        raise ValueError(f"Unknown output format: {output_format}. Available: auto, text, image")
    if output and os.path.splitext(output)[1].lower() in IMAGE_EXTENSIONS:
        return "image"
    return "text"
