import logging
from typing import Tuple

import numpy as np
from PIL import Image

from photobooth.api.pil_io import decode_image, encode_data_uri

logging.basicConfig(level=logging.DEBUG)

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)


def make_image(
    size: Tuple[int, int] = (40, 30), color: Tuple[int, ...] = RED
) -> Image.Image:
    return Image.new("RGBA", size, color)


def make_data_uri(size: Tuple[int, int] = (40, 30), color=RED) -> str:
    return encode_data_uri(make_image(size, color))


def decode_pixels(uri: str) -> np.ndarray:
    """Decode a data URI into a uint8 (height, width, 4) array."""
    return np.asarray(decode_image(uri))


def is_close(pixel, expected, tolerance: int = 2) -> bool:
    pixel = np.asarray(pixel, dtype=np.int32)
    expected = np.asarray(expected, dtype=np.int32)
    return bool(np.all(np.abs(pixel - expected) <= tolerance))
