"""
Command-line interface.

Usage:
    ascii-match photo.jpg                      # Print to stdout
    ascii-match photo.jpg -w 120 -o art.txt    # Save text
    ascii-match photo.jpg -o art.png           # Render to an image
"""

import argparse
import sys
from typing import List, Optional

from .charsets import list_charsets
from .config import RenderConfig
from .errors import AsciiMatchError
from .render import render_image


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ascii-match",
        description="Render an image as text art by matching glyph signatures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Charsets: {", ".join(list_charsets())}
Any other --charset value is used literally as the candidate characters.

Examples:
  ascii-match cat.png -w 60
  ascii-match cat.png --contrast 1.4 --gamma 0.8 -o cat.png.txt
  ascii-match cat.png -o cat_art.png --text-colour 33ff33 --background-colour 000000
"""
    )

    parser.add_argument("image", help="Input image path")

    parser.add_argument(
        "--width", "-w",
        type=int,
        default=80,
        help="Output width in characters (default: 80)"
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Output height in lines (default: from aspect ratio)"
    )
    parser.add_argument(
        "--contrast", "-c",
        type=float,
        default=1.0,
        help="Tone curve contrast (default: 1.0)"
    )
    parser.add_argument(
        "--gamma", "-g",
        type=float,
        default=1.0,
        help="Tone curve gamma (default: 1.0)"
    )
    parser.add_argument(
        "--charset",
        default="ascii_standard",
        help="Charset name or literal characters (default: ascii_standard)"
    )
    parser.add_argument(
        "--font", "-f",
        default=None,
        help="TrueType font file (default: first monospace font found)"
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Drop glyphs with undefined signatures instead of failing"
    )
    parser.add_argument(
        "--equalize",
        action="store_true",
        help="Apply CLAHE contrast enhancement before sampling"
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output file path (default: stdout)"
    )
    parser.add_argument(
        "--format",
        choices=["auto", "text", "image"],
        default="auto",
        help="Output kind; auto picks image for image file extensions"
    )
    parser.add_argument(
        "--text-scale",
        type=float,
        default=16.0,
        help="Font size for image output (default: 16)"
    )
    parser.add_argument(
        "--line-height",
        type=float,
        default=None,
        help="Pixels per line for image output (default: font line height)"
    )
    parser.add_argument(
        "--text-colour",
        default="000000",
        help="Hex RGB text colour for image output (default: 000000)"
    )
    parser.add_argument(
        "--background-colour",
        default="ffffff",
        help="Hex RGB background colour for image output (default: ffffff)"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress progress messages"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = RenderConfig.from_args(args)

    def status(message: str):
        if not args.quiet:
            print(message, file=sys.stderr)

    try:
        status(f"🔤 Building alphabet ({config.charset})...")
        render_image(args.image, config)
    except (AsciiMatchError, ValueError, OSError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        if e.__cause__ is not None:
            print(f"   [{e.__cause__}]", file=sys.stderr)
        return 1

    if config.output:
        status(f"✅ Saved to {config.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
