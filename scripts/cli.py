#!/usr/bin/env python3
"""
Image-to-Text Art Renderer

Usage:
    python scripts/cli.py photo.jpg             # Print to stdout
    python scripts/cli.py photo.jpg -o art.png  # Render to an image
    python scripts/cli.py --help                # Help
"""

import os
import sys

# Add project to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ascii_match.cli import main


if __name__ == "__main__":
    sys.exit(main())
