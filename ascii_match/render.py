"""
Image-to-Text Rendering Loop

Ties the pieces together:

    grayscale raster -> sample_grid -> ToneCurve -> best_match -> sink

asciify() is the core loop. image_to_ascii() and render_image() add image
preprocessing, alphabet construction and sink selection from a RenderConfig.
"""

import io
from typing import Optional, TextIO, Union
import numpy as np
from PIL import Image

from .charsets import get_alphabet
from .config import RenderConfig
from .fonts import load_font
from .intensity import Alphabet
from .matcher import best_match
from .preprocessing import load_image, to_raster
from .sampling import grid_size, sample_grid
from .sinks import ImageSink, TextSink, TextWriter
from .tone import ToneCurve


def asciify(
    writer: TextWriter,
    raster: np.ndarray,
    alphabet: Alphabet,
    contrast: float = 1.0,
    gamma: float = 1.0,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> None:
    """
    Render a grayscale raster through a sink, one character per 3x3 cell.

    Args:
        writer: Output sink
        raster: uint8 array of shape (3 * height, 3 * width)
        alphabet: Signatures to match against
        contrast: Tone curve contrast
        gamma: Tone curve gamma
        width: Grid width (default: raster width / 3)
        height: Grid height (default: raster height / 3)

    Raises:
        ValueError: If the raster does not fit the grid
        SinkError: If the sink fails
    """
    width, height = grid_size(raster, width, height)
    curve = ToneCurve(contrast=contrast, gamma=gamma)

    # First pass: sample every cell
    rows = sample_grid(raster, width, height)

    # Second pass: tone map and match
    for row in rows:
        for cell in row:
            writer.write_char(best_match(curve.apply(cell), alphabet))
        writer.write_newline()
    writer.flush()


def asciify_to_string(
    raster: np.ndarray,
    alphabet: Alphabet,
    contrast: float = 1.0,
    gamma: float = 1.0,
) -> str:
    """Render a raster and return the text, one line per row."""
    buffer = io.StringIO()
    asciify(TextSink(buffer), raster, alphabet, contrast, gamma)
    return buffer.getvalue()


def create_sink(
    config: RenderConfig,
    width: int,
    height: int,
    stream: Optional[TextIO] = None,
) -> Union[TextSink, ImageSink]:
    """
    Build the sink selected by config.

    Text goes to stream (or stdout) unless config.output names a file, in
    which case the caller owns closing the returned sink's stream.
    """
    if config.sink_kind == "image":
        font = load_font(config.font_path, config.text_scale)
        return ImageSink(
            config.output,
            font,
            width,
            height,
            line_height=config.line_height,
            text_colour=config.text_rgb,
            background_colour=config.background_rgb,
        )

    if stream is None and config.output is not None:
        stream = open(config.output, 'w', encoding='utf-8')
    return TextSink(stream)


def image_to_ascii(image: Image.Image, config: Optional[RenderConfig] = None) -> str:
    """
    Convert a PIL image to text art.

    Example:
        >>> text = image_to_ascii(Image.open("cat.png"), RenderConfig(output_width=60))
        >>> print(text)
    """
    config = (config or RenderConfig()).validate()
    width, height = config.grid_size(image.size)
    raster = to_raster(image, width, height, equalize=config.equalize)
    alphabet = get_alphabet(config.charset, config.font_path, config.glyph_height, config.strict)
    return asciify_to_string(raster, alphabet, config.contrast, config.gamma)


def render_image(
    path: str,
    config: RenderConfig,
    stream: Optional[TextIO] = None,
) -> None:
    """Load an image file and render it to the sink selected by config."""
    config.validate()
    image = load_image(path)
    width, height = config.grid_size(image.size)
    raster = to_raster(image, width, height, equalize=config.equalize)
    alphabet = get_alphabet(config.charset, config.font_path, config.glyph_height, config.strict)

    sink = create_sink(config, width, height, stream)
    try:
        asciify(sink, raster, alphabet, config.contrast, config.gamma, width, height)
    finally:
        if isinstance(sink, TextSink) and stream is None and config.output is not None:
            sink.stream.close()
