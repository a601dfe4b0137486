"""Pytest configuration for photobooth tests."""

import random

import pytest

from photobooth.composite.surface import Surface


@pytest.fixture
def rng() -> random.Random:
    return random.Random(0)


@pytest.fixture
def surface() -> Surface:
    """Opaque mid-grey 200 x 150 surface."""
    surface = Surface(200, 150)
    surface.fill_rect(0, 0, 200, 150, "#808080")
    return surface
