"""Utility functions for composite operations."""

import math
from typing import Tuple, Union

import numpy as np

Viewport = Tuple[int, int, int, int]


def divide(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Safe division for color ops."""
    with np.errstate(divide="ignore", invalid="ignore"):
        c = np.true_divide(a, b)
        c[~np.isfinite(c)] = 1.0
    return c


def intersect(a: Viewport, b: Viewport) -> Viewport:
    """Calculate intersection of two bounding boxes."""
    inter = (max(a[0], b[0]), max(a[1], b[1]), min(a[2], b[2]), min(a[3], b[3]))
    if inter[0] >= inter[2] or inter[1] >= inter[3]:
        return (0, 0, 0, 0)
    return inter


def union(
    backdrop: Union[float, np.ndarray], source: Union[float, np.ndarray]
) -> Union[float, np.ndarray]:
    """Generalized union of shape."""
    return backdrop + source - (backdrop * source)


def clip(x: np.ndarray) -> np.ndarray:
    """Clip between [0, 1]."""
    return np.clip(x, 0.0, 1.0)


def expand(bounds: Tuple[float, float, float, float], margin: float) -> Viewport:
    """Grow float bounds by ``margin`` and snap outward to integer pixels."""
    return (
        int(math.floor(bounds[0] - margin)),
        int(math.floor(bounds[1] - margin)),
        int(math.ceil(bounds[2] + margin)),
        int(math.ceil(bounds[3] + margin)),
    )


def crop(plane: Union[float, np.ndarray], outer: Viewport, inner: Viewport):
    """Slice the ``inner`` viewport out of a plane covering ``outer``."""
    if not isinstance(plane, np.ndarray):
        return plane
    return plane[
        inner[1] - outer[1] : inner[3] - outer[1],
        inner[0] - outer[0] : inner[2] - outer[0],
    ]
