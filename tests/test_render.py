"""
Render Loop and Sink Tests
==========================
Drives asciify() with recording and real sinks.
"""

import io
import os
import tempfile
import unittest
import numpy as np
from PIL import Image, ImageFont

from ascii_match.config import RenderConfig
from ascii_match.errors import SinkError
from ascii_match.intensity import Alphabet, Intensity
from ascii_match.render import asciify, asciify_to_string, create_sink, image_to_ascii
from ascii_match.sinks import ImageSink, TextSink, infer_sink_kind


BINARY_ALPHABET = Alphabet([('X', Intensity.uniform(0.0)), (' ', Intensity.uniform(1.0))])


class RecordingSink:
    def __init__(self):
        self.events = []

    def write_char(self, char):
        self.events.append(char)

    def write_newline(self):
        self.events.append("\n")

    def flush(self):
        self.events.append("flush")


class FailingSink(RecordingSink):
    def write_char(self, char):
        raise SinkError("disk full")


class BrokenStream(io.StringIO):
    def write(self, text):
        raise OSError("broken pipe")


def default_freetype_font(size):
    font = ImageFont.load_default(size=size)
    if not isinstance(font, ImageFont.FreeTypeFont):
        raise unittest.SkipTest("Pillow built without FreeType")
    return font


class TestAsciify(unittest.TestCase):

    def test_rows_then_flush(self):
        raster = np.zeros((6, 9), dtype=np.uint8)
        raster[0:3, 3:6] = 255
        raster[3:6, 0:3] = 255
        sink = RecordingSink()

        asciify(sink, raster, BINARY_ALPHABET)

        self.assertEqual(sink.events, ['X', ' ', 'X', '\n', ' ', 'X', 'X', '\n', 'flush'])

    def test_to_string(self):
        raster = np.full((3, 6), 255, dtype=np.uint8)
        self.assertEqual(asciify_to_string(raster, BINARY_ALPHABET), "  \n")

    def test_contrast_pushes_midtones(self):
        raster = np.full((3, 3), 140, dtype=np.uint8)
        self.assertEqual(asciify_to_string(raster, BINARY_ALPHABET), " \n")
        self.assertEqual(asciify_to_string(raster, BINARY_ALPHABET, gamma=3.0), "X\n")

    def test_empty_alphabet_writes_spaces(self):
        raster = np.zeros((3, 6), dtype=np.uint8)
        self.assertEqual(asciify_to_string(raster, Alphabet()), "  \n")

    def test_grid_mismatch(self):
        with self.assertRaises(ValueError):
            asciify(RecordingSink(), np.zeros((6, 6), dtype=np.uint8), BINARY_ALPHABET, width=3)

    def test_sink_errors_propagate(self):
        with self.assertRaises(SinkError):
            asciify(FailingSink(), np.zeros((3, 3), dtype=np.uint8), BINARY_ALPHABET)


class TestImageToAscii(unittest.TestCase):

    def test_half_black_image(self):
        default_freetype_font(36)
        img = Image.new('L', (40, 20), color=255)
        img.paste(0, (0, 0, 20, 20))
        config = RenderConfig(output_width=4, output_height=2, charset="#")

        self.assertEqual(image_to_ascii(img, config), "##  \n##  \n")


class TestTextSink(unittest.TestCase):

    def test_writes_through(self):
        stream = io.StringIO()
        sink = TextSink(stream)
        sink.write_char('é')
        sink.write_newline()
        sink.flush()
        self.assertEqual(stream.getvalue(), "é\n")

    def test_wraps_os_errors(self):
        sink = TextSink(BrokenStream())
        with self.assertRaises(SinkError) as ctx:
            sink.write_char('a')
        self.assertIsInstance(ctx.exception.__cause__, OSError)


class TestImageSink(unittest.TestCase):

    def test_renders_canvas(self):
        font = default_freetype_font(32)
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "art.png")
            sink = ImageSink(path, font, width=4, height=2, text_colour=(255, 0, 0))
            for char in "####":
                sink.write_char(char)
            sink.write_newline()
            for char in "    ":
                sink.write_char(char)
            sink.write_newline()
            sink.flush()

            with Image.open(path) as img:
                self.assertEqual(img.size, sink.canvas.size)
                self.assertEqual(img.size[0], max(round(4 * font.getlength(" ")), 1))
                colours = {colour for _, colour in img.convert("RGB").getcolors(1 << 16)}

        self.assertIn((255, 255, 255), colours)
        # anti-aliased red text on white
        self.assertTrue(any(g == b and r > g for r, g, b in colours if (r, g, b) != (255, 255, 255)))

    def test_save_failure_is_sink_error(self):
        font = default_freetype_font(16)
        sink = ImageSink("/nonexistent-dir/art.png", font, width=1, height=1)
        with self.assertRaises(SinkError):
            sink.flush()


class TestSinkSelection(unittest.TestCase):

    def test_infer_kind(self):
        self.assertEqual(infer_sink_kind(None), "text")
        self.assertEqual(infer_sink_kind("art.txt"), "text")
        self.assertEqual(infer_sink_kind("art.PNG"), "image")
        self.assertEqual(infer_sink_kind("art.png", "text"), "text")
        with self.assertRaises(ValueError):
            infer_sink_kind("art.png", "html")

    def test_create_text_sink(self):
        stream = io.StringIO()
        sink = create_sink(RenderConfig(), 10, 5, stream)
        self.assertIsInstance(sink, TextSink)
        self.assertIs(sink.stream, stream)

    def test_create_image_sink(self):
        default_freetype_font(16)
        config = RenderConfig(output="art.png", text_colour="00ff00")
        sink = create_sink(config, 10, 5)
        self.assertIsInstance(sink, ImageSink)
        self.assertEqual(sink.text_colour, (0, 255, 0))


if __name__ == '__main__':
    unittest.main()
