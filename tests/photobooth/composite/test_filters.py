import logging

import numpy as np
import pytest

from photobooth.composite.filters import FILTER_FUNCTIONS, apply_filter
from photobooth.constants import Filter

logger = logging.getLogger(__name__)


def _pixels(*rgba):
    return np.array([rgba], dtype=np.uint8).reshape((1, 1, 4))


@pytest.mark.parametrize(
    "filter, source, expected",
    [
        (Filter.GRAYSCALE, (10, 20, 30), (20, 20, 20)),
        (Filter.SEPIA, (100, 100, 100), (135, 120, 94)),
        (Filter.SEPIA, (255, 255, 255), (255, 255, 239)),
        (Filter.VINTAGE, (100, 100, 100), (120, 110, 80)),
        (Filter.VINTAGE, (250, 250, 250), (255, 255, 200)),
        (Filter.WARM, (250, 10, 10), (255, 10, 0)),
        (Filter.COOL, (10, 10, 250), (0, 10, 255)),
        (Filter.BRIGHT, (220, 0, 0), (255, 40, 40)),
        (Filter.CONTRAST, (128, 100, 200), (128, 86, 236)),
        (Filter.CONTRAST, (0, 255, 10), (0, 255, 0)),
    ],
)
def test_filter_values(filter, source, expected):
    pixels = _pixels(*source, 77)
    apply_filter(pixels, filter)
    assert tuple(pixels[0, 0, :3]) == expected
    assert pixels[0, 0, 3] == 77


@pytest.mark.parametrize("filter", list(Filter))
def test_filter_keeps_alpha(filter):
    rng = np.random.default_rng(0)
    pixels = rng.integers(0, 256, size=(8, 6, 4), dtype=np.uint8)
    alpha = pixels[:, :, 3].copy()
    result = apply_filter(pixels, filter)
    assert result is pixels
    assert result.dtype == np.uint8
    assert np.array_equal(result[:, :, 3], alpha)


@pytest.mark.parametrize("filter", ["none", "unknown", "", None])
def test_filter_identity(filter):
    rng = np.random.default_rng(1)
    pixels = rng.integers(0, 256, size=(4, 4, 4), dtype=np.uint8)
    expected = pixels.copy()
    assert np.array_equal(apply_filter(pixels, filter), expected)


def test_filter_flat_buffer():
    pixels = np.array([10, 20, 30, 255, 100, 100, 100, 0], dtype=np.uint8)
    apply_filter(pixels, "grayscale")
    assert pixels.shape == (8,)
    assert list(pixels) == [20, 20, 20, 255, 100, 100, 100, 0]


def test_filter_accepts_string_tags():
    pixels = _pixels(220, 0, 0, 255)
    apply_filter(pixels, "bright")
    assert tuple(pixels[0, 0]) == (255, 40, 40, 255)


def test_filter_registry():
    assert set(FILTER_FUNCTIONS) == set(Filter) - {Filter.NONE}
