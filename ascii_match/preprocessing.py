"""
Image Preprocessing Utilities

Turns a decoded image into the grayscale raster the sampler expects:
exactly 3x the output grid in each dimension, one uint8 channel.

- Loading (Pillow)
- Resizing with Pillow's triangle filter
- Grayscale conversion
- Optional CLAHE contrast enhancement
"""

from typing import Tuple
import numpy as np
import cv2
from PIL import Image

from .sampling import CELL_SIZE


def load_image(path: str) -> Image.Image:
    """
    Open and decode an image file.

    Raises:
        OSError: If the file is missing or cannot be decoded
    """
    with Image.open(path) as img:
        img.load()
        return img.copy()


def enhance_contrast(
    image: np.ndarray,
    clip_limit: float = 2.0,
    tile_grid_size: Tuple[int, int] = (8, 8),
) -> np.ndarray:
    """
    Enhance contrast using CLAHE (Contrast Limited Adaptive Histogram Equalization).

    Args:
        image: Grayscale image
        clip_limit: Threshold for contrast limiting
        tile_grid_size: Size of grid for equalization

    Returns:
        Contrast-enhanced image
    """
    clahe = cv2.createCLAHE(clipLimit=clip_limit, tileGridSize=tile_grid_size)
    return clahe.apply(image)


def to_array(image: Image.Image) -> np.ndarray:
    """uint8 array of a PIL image, either grayscale or RGB."""
    if image.mode == 'L':
        return np.array(image)
    return np.array(image.convert('RGB'))


def to_raster(
    image: Image.Image,
    width: int,
    height: int,
    equalize: bool = False,
) -> np.ndarray:
    """
    Resize and convert an image for a width x height character grid.

    Resizing uses Pillow's triangle (bilinear) filter, which averages over
    the source area when shrinking so thin lines still darken their cells.
    Grayscale conversion happens after resizing, with Rec. 601 luma weights
    (0.299 R + 0.587 G + 0.114 B, as in Pillow's convert("L")).

    Args:
        image: Source PIL Image
        width: Grid width in characters
        height: Grid height in lines
        equalize: Apply CLAHE after resizing

    Returns:
        uint8 array of shape (3 * height, 3 * width)
    """
    if image.mode not in ('L', 'RGB'):
        image = image.convert('RGB')
    resized = to_array(image.resize(
        (width * CELL_SIZE, height * CELL_SIZE),
        Image.Resampling.BILINEAR,
    ))
    if resized.ndim == 3:
        raster = cv2.cvtColor(resized, cv2.COLOR_RGB2GRAY)
    else:
        raster = resized
    if equalize:
        raster = enhance_contrast(raster)
    return raster
