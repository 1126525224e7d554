"""
Configuration and CLI Tests
===========================
"""

import contextlib
import io
import os
import tempfile
import unittest
from PIL import Image, ImageDraw, ImageFont

from ascii_match.charsets import ASCII_STANDARD, resolve_characters
from ascii_match.cli import build_parser, main
from ascii_match.config import RenderConfig
from ascii_match.errors import Invalid


def require_freetype():
    if not isinstance(ImageFont.load_default(size=12), ImageFont.FreeTypeFont):
        raise unittest.SkipTest("Pillow built without FreeType")


class TestRenderConfig(unittest.TestCase):

    def test_defaults(self):
        config = RenderConfig()
        self.assertEqual(config.characters, ASCII_STANDARD)
        self.assertEqual(config.glyph_height, 36)
        self.assertEqual(config.sink_kind, "text")
        self.assertIs(config.validate(), config)

    def test_grid_size_halves_height(self):
        config = RenderConfig(output_width=80)
        self.assertEqual(config.grid_size((200, 100)), (80, 20))
        self.assertEqual(config.grid_size((1000, 10)), (80, 1))

    def test_explicit_height(self):
        config = RenderConfig(output_width=10, output_height=7)
        self.assertEqual(config.grid_size((200, 100)), (10, 7))

    def test_literal_charset(self):
        self.assertEqual(RenderConfig(charset="#. ").characters, "#. ")
        self.assertEqual(resolve_characters("ascii_heavy"), " @#%8&WM$B0OQZEX")

    def test_validate_rejects_bad_values(self):
        with self.assertRaises(ValueError):
            RenderConfig(output_width=0).validate()
        with self.assertRaises(ValueError):
            RenderConfig(output_height=-2).validate()
        with self.assertRaises(ValueError):
            RenderConfig(charset="").validate()
        with self.assertRaises(ValueError):
            RenderConfig(output_format="image").validate()

    def test_validate_parses_colours_for_images(self):
        with self.assertRaises(Invalid):
            RenderConfig(output="art.png", background_colour="zz0000").validate()
        config = RenderConfig(output="art.png", background_colour="102030")
        self.assertEqual(config.validate().background_rgb, (16, 32, 48))

    def test_from_args(self):
        args = build_parser().parse_args([
            "in.png", "-w", "40", "--contrast", "1.5", "--gamma", "0.8",
            "--charset", "ascii_dense", "--lenient", "-o", "out.png",
        ])
        config = RenderConfig.from_args(args)
        self.assertEqual(config.output_width, 40)
        self.assertEqual(config.contrast, 1.5)
        self.assertEqual(config.gamma, 0.8)
        self.assertFalse(config.strict)
        self.assertEqual(config.sink_kind, "image")


class TestCli(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.image_path = os.path.join(self.tmp.name, "input.png")
        img = Image.new('RGB', (60, 30), color='white')
        ImageDraw.Draw(img).rectangle([0, 0, 29, 29], fill='black')
        img.save(self.image_path)

    def tearDown(self):
        self.tmp.cleanup()

    def test_text_output(self):
        require_freetype()
        out_path = os.path.join(self.tmp.name, "art.txt")
        code = main([self.image_path, "-w", "12", "-q", "-o", out_path, "--charset", "#"])
        self.assertEqual(code, 0)

        with open(out_path, encoding='utf-8') as f:
            lines = f.read().splitlines()
        # 30 * 12 // 60 // 2 = 3 lines
        self.assertEqual(len(lines), 3)
        for line in lines:
            self.assertEqual(len(line), 12)
            self.assertEqual(line[:5], "#####")
            self.assertEqual(line[-5:], "     ")

    def test_image_output(self):
        require_freetype()
        out_path = os.path.join(self.tmp.name, "art.png")
        code = main([self.image_path, "-w", "8", "-q", "-o", out_path, "--charset", "ascii_heavy"])
        self.assertEqual(code, 0)
        with Image.open(out_path) as img:
            self.assertEqual(img.mode, "RGB")

    def test_missing_image(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            code = main([os.path.join(self.tmp.name, "missing.png"), "-q"])
        self.assertEqual(code, 1)
        self.assertIn("Error", stderr.getvalue())

    def test_bad_colour(self):
        stderr = io.StringIO()
        out_path = os.path.join(self.tmp.name, "art.png")
        with contextlib.redirect_stderr(stderr):
            code = main([self.image_path, "-q", "-o", out_path, "--text-colour", "12345"])
        self.assertEqual(code, 1)


if __name__ == '__main__':
    unittest.main()
