"""
Hex Colour Parsing

Accepts RGB colours of the form ab7c01 (no leading #).
"""

import string
from typing import Tuple

from .errors import Incomplete, Invalid


RgbTuple = Tuple[int, int, int]

_HEX_DIGITS = frozenset(string.hexdigits)


def _parse_two_digit_hex(text: str) -> Tuple[int, str]:
    if len(text) < 2:
        raise Incomplete()
    unit = text[:2]
    if not all(c in _HEX_DIGITS for c in unit):
        raise Invalid()
    return int(unit, 16), text[2:]


def parse_rgb(text: str) -> RgbTuple:
    """
    Parse a six-digit hex colour.

    Raises:
        Incomplete: Fewer than two characters left for a component
        Invalid: Non-hex characters, or data after the third component
    """
    r, remaining = _parse_two_digit_hex(text)
    g, remaining = _parse_two_digit_hex(remaining)
    b, remaining = _parse_two_digit_hex(remaining)
    if remaining:
        raise Invalid()
    return (r, g, b)
