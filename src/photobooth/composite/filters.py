"""
Pixel filters.

Each filter is a vectorized transform over the RGB channels of a ``uint8``
RGBA buffer; the alpha channel is never touched. Results are rounded half to
even and clamped to [0, 255], the same way a clamped byte array stores them.
"""

import logging

import numpy as np

from photobooth.constants import Filter
from photobooth.registry import new_registry

logger = logging.getLogger(__name__)

FILTER_FUNCTIONS, register = new_registry()

_SEPIA = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ],
    dtype=np.float64,
)


def apply_filter(pixels: np.ndarray, filter) -> np.ndarray:
    """
    Apply a pixel filter in place.

    :param pixels: ``uint8`` array whose last axis is RGBA, either of shape
        (height, width, 4) or a flat (N * 4,) buffer.
    :param filter: :py:class:`~photobooth.constants.Filter` or its string tag.
        Unknown tags are the identity.
    :return: the same ``pixels`` array.
    """
    filter = Filter(filter)
    func = FILTER_FUNCTIONS.get(filter)
    if func is None:
        return pixels
    view = pixels if pixels.ndim > 1 else pixels.reshape((-1, 4))
    rgb = view[..., :3].reshape((-1, 3)).astype(np.float64)
    result = np.clip(np.rint(func(rgb)), 0, 255).astype(np.uint8)
    view[..., :3] = result.reshape(view[..., :3].shape)
    return pixels


@register(Filter.GRAYSCALE)
def _grayscale(rgb):
    mean = rgb.mean(axis=1, keepdims=True)
    return np.repeat(mean, 3, axis=1)


@register(Filter.SEPIA)
def _sepia(rgb):
    return rgb @ _SEPIA.T


@register(Filter.VINTAGE)
def _vintage(rgb):
    return rgb * np.array([1.2, 1.1, 0.8])


@register(Filter.WARM)
def _warm(rgb):
    return rgb + np.array([30.0, 0.0, -20.0])


@register(Filter.COOL)
def _cool(rgb):
    return rgb + np.array([-20.0, 0.0, 30.0])


@register(Filter.BRIGHT)
def _bright(rgb):
    return rgb + 40.0


@register(Filter.CONTRAST)
def _contrast(rgb):
    return 1.5 * (rgb - 128.0) + 128.0
