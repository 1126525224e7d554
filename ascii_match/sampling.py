"""
Image Cell Sampling

Each output cell covers a 3x3 block of the grayscale raster. The block is
reduced to the same five regions used for glyph signatures:

    left   = column x=0       top    = row y=0
    right  = column x=2       bottom = row y=2
    middle = the centre pixel

Values are raw pixel brightness divided by 256, so they lie in [0, 1).
"""

from typing import List, Optional, Tuple
import numpy as np

from .intensity import Intensity


CELL_SIZE = 3


def avg_intensity(raster: np.ndarray, x1: int, y1: int, x2: int, y2: int) -> float:
    """
    Mean brightness of an inclusive pixel rectangle, divided by 256.

    Args:
        raster: Grayscale image as a (height, width) array
        x1, y1: Top-left corner (inclusive)
        x2, y2: Bottom-right corner (inclusive)

    Raises:
        ValueError: If the rectangle is empty or outside the raster
    """
    rows, cols = raster.shape[:2]
    if not (0 <= x1 <= x2 < cols and 0 <= y1 <= y2 < rows):
        raise ValueError(
            f"Rectangle ({x1}, {y1})-({x2}, {y2}) is outside the {cols}x{rows} raster"
        )
    total = int(raster[y1:y2 + 1, x1:x2 + 1].sum())
    return total / ((x2 - x1 + 1) * (y2 - y1 + 1)) / 256.0


def sample_cell(raster: np.ndarray, i: int, j: int) -> Intensity:
    """Raw Intensity of the cell in column i, row j."""
    x = CELL_SIZE * i
    y = CELL_SIZE * j
    return Intensity(
        left=avg_intensity(raster, x, y, x, y + 2),
        right=avg_intensity(raster, x + 2, y, x + 2, y + 2),
        top=avg_intensity(raster, x, y, x + 2, y),
        bottom=avg_intensity(raster, x, y + 2, x + 2, y + 2),
        middle=avg_intensity(raster, x + 1, y + 1, x + 1, y + 1),
    )


def grid_size(
    raster: np.ndarray,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Output grid size for a raster, checking the 3x rule.

    Raises:
        ValueError: If the raster is not single-channel or not exactly
            three times the grid in each dimension
    """
    if raster.ndim != 2:
        raise ValueError(f"Expected a single-channel raster, got shape {raster.shape}")

    rows, cols = raster.shape
    if width is None:
        width = cols // CELL_SIZE
    if height is None:
        height = rows // CELL_SIZE

    if (cols, rows) != (width * CELL_SIZE, height * CELL_SIZE):
        raise ValueError(
            f"Raster is {cols}x{rows}, expected {width * CELL_SIZE}x{height * CELL_SIZE} "
            f"for a {width}x{height} grid"
        )
    return width, height


def sample_grid(
    raster: np.ndarray,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> List[List[Intensity]]:
    """Sample every cell; returns one list of Intensities per output row."""
    width, height = grid_size(raster, width, height)
    return [
        [sample_cell(raster, i, j) for i in range(width)]
        for j in range(height)
    ]
