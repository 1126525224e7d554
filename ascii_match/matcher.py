"""
Nearest-Signature Matching

Picks the alphabet character whose signature is closest to a tone-mapped
cell under Intensity.distance. Ties go to the earliest alphabet entry.
"""

from typing import Iterable, Tuple

from .intensity import DEFAULT_ENTRY, Intensity


def closest_entry(
    cell: Intensity,
    alphabet: Iterable[Tuple[str, Intensity]],
) -> Tuple[str, Intensity]:
    """
    Alphabet entry with the smallest distance to cell.

    An empty alphabet yields a space with an all-zero signature.
    """
    # min() keeps the first of equal keys
    return min(alphabet, key=lambda entry: cell.distance(entry[1]), default=DEFAULT_ENTRY)


def best_match(cell: Intensity, alphabet: Iterable[Tuple[str, Intensity]]) -> str:
    """Character that best matches cell."""
    return closest_entry(cell, alphabet)[0]
