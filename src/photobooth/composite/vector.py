"""Vector path rasterization for compositing."""

import logging
from typing import Tuple

import aggdraw
import numpy as np
from PIL import Image

from photobooth.composite.path import Path

logger = logging.getLogger(__name__)


def draw_fill_mask(path: Path, viewport: Tuple[int, int, int, int]) -> np.ndarray:
    """
    Rasterize the interior of a device-space path into a coverage mask.

    :return: float32 array of shape (height, width, 1) in [0, 1].
    """
    return _draw_path(path, viewport, brush={"color": 255})


def draw_stroke_mask(
    path: Path, viewport: Tuple[int, int, int, int], width: float
) -> np.ndarray:
    """
    Rasterize the outline of a device-space path with the given pen width.
    """
    return _draw_path(path, viewport, pen={"color": 255, "width": max(0.1, width)})


def _draw_path(path, viewport, brush=None, pen=None):
    """
    Rasterize Bezier curves using aggdraw.

    Coordinates are shifted so that the top-left of ``viewport`` maps to the
    origin of the mask.
    """
    width = max(0, viewport[2] - viewport[0])
    height = max(0, viewport[3] - viewport[1])
    if width == 0 or height == 0:
        return np.zeros((height, width, 1), dtype=np.float32)

    mask = Image.new("L", (width, height), 0)
    symbol = path.symbol(offset=(viewport[0], viewport[1]))
    if symbol:
        draw = aggdraw.Draw(mask)
        pen = aggdraw.Pen(**pen) if pen else None
        brush = aggdraw.Brush(**brush) if brush else None
        draw.symbol((0, 0), aggdraw.Symbol(symbol), pen, brush)
        draw.flush()
        del draw
    else:
        logger.debug("empty path")
    return np.expand_dims(np.array(mask).astype(np.float32) / 255.0, 2)
