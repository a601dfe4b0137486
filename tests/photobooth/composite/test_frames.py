import logging
import random

import numpy as np
import pytest

from photobooth.composite import shapes, transform
from photobooth.composite.frames import FRAMES, draw_frame, edge_scatter
from photobooth.composite.surface import Surface
from photobooth.constants import Frame

logger = logging.getLogger(__name__)

STYLES = [frame for frame in Frame if frame != Frame.NONE]
SCATTER_STYLES = [
    Frame.CHRISTMAS,
    Frame.BIRTHDAY,
    Frame.OCEAN,
    Frame.BUBBLE,
    Frame.HEARTS,
    Frame.SPARKLE,
    Frame.BLOSSOM,
]


def test_frame_registry():
    assert set(FRAMES) == set(STYLES)
    assert Frame.NONE not in FRAMES
    assert len(FRAMES) == 23
    for frame, func in FRAMES.items():
        assert func.frame == frame


@pytest.mark.parametrize("frame", STYLES)
def test_draw_frame(surface, frame):
    before = surface.get_pixels()
    draw_frame(surface, 0, 0, 200, 150, frame, random.Random(1))
    after = surface.get_pixels()
    assert not np.array_equal(before, after)
    assert surface.matrix == transform.IDENTITY
    assert surface.global_alpha == 1.0


@pytest.mark.parametrize("frame", ["none", "unknown", None])
def test_draw_frame_noop(surface, frame):
    before = surface.get_pixels()
    draw_frame(surface, 0, 0, 200, 150, frame)
    assert np.array_equal(before, surface.get_pixels())


@pytest.mark.parametrize("frame", STYLES)
@pytest.mark.parametrize(
    "rect", [(0, 0, 0, 0), (10, 10, 1, 1), (50, 50, -20, 30), (190, 140, 40, 40)]
)
def test_draw_frame_degenerate(surface, frame, rect):
    draw_frame(surface, *rect, frame, random.Random(2))


@pytest.mark.parametrize("frame", SCATTER_STYLES)
def test_draw_frame_seeded(frame):
    results = []
    for _ in range(2):
        surface = Surface(160, 120)
        draw_frame(surface, 0, 0, 160, 120, frame, random.Random(42))
        results.append(surface.get_pixels())
    assert np.array_equal(results[0], results[1])


@pytest.mark.parametrize("frame", [Frame.POLAROID, Frame.FILM, Frame.CANDY])
def test_draw_frame_stays_inside(frame):
    surface = Surface(200, 200)
    draw_frame(surface, 50, 50, 100, 100, frame)
    alpha = surface.get_pixels()[:, :, 3]
    assert alpha[50:150, 50:150].any()
    assert not alpha[:45].any()
    assert not alpha[155:].any()
    assert not alpha[:, :45].any()
    assert not alpha[:, 155:].any()


def test_draw_frame_offset_rect(surface):
    draw_frame(surface, 100, 0, 100, 150, Frame.POLAROID)
    pixels = surface.get_pixels()
    assert tuple(pixels[75, 20]) == (128, 128, 128, 255)
    assert tuple(pixels[75, 102]) != (128, 128, 128, 255)


def test_polaroid_borders():
    surface = Surface(200, 200)
    draw_frame(surface, 0, 0, 200, 200, Frame.POLAROID)
    pixels = surface.get_pixels()
    # 8px sides and a 24px bottom band.
    assert pixels[100, 4, 3] > 200
    assert pixels[100, 12, 3] == 0
    assert pixels[190, 100, 3] > 0
    assert pixels[100, 100, 3] == 0


def test_christmas_snow_in_edge_band():
    surface = Surface(300, 300)
    draw_frame(surface, 0, 0, 300, 300, Frame.CHRISTMAS, random.Random(3))
    alpha = surface.get_pixels()[:, :, 3]
    # Border stroke and snow stay in the outer band.
    assert not alpha[40:260, 40:260].any()
    assert alpha[:20].any()


def test_christmas_unseeded_keeps_border():
    renders = []
    for _ in range(2):
        surface = Surface(300, 300)
        draw_frame(surface, 0, 0, 300, 300, Frame.CHRISTMAS)
        renders.append(surface.get_pixels())
    # Snow positions may differ between renders; the border does not.
    for pixels in renders:
        alpha = pixels[:, :, 3]
        assert alpha[150, 10] > 200
        assert alpha[10, 150] > 200
        assert alpha[290, 150] > 200
        assert not alpha[40:260, 40:260].any()


@pytest.mark.parametrize("seed", range(5))
def test_edge_scatter(seed):
    rng = random.Random(seed)
    points = list(edge_scatter(rng, 10, 20, 100, 80, 15, 200))
    assert 0 < len(points) < 200
    for x, y in points:
        assert 10 <= x <= 110
        assert 20 <= y <= 100
        assert x < 25 or x > 95 or y < 35 or y > 85


@pytest.mark.parametrize(
    "path",
    [
        shapes.heart_path(10),
        shapes.star_path(10),
        shapes.sparkle_path(10),
        shapes.diamond_sparkle_path(10),
        shapes.petal_path(10, 4),
        shapes.flower_paths(10)[0],
        shapes.bow_paths(10)[0],
        shapes.starburst_path(10, 6),
    ],
)
def test_glyphs_are_centered(path):
    left, top, right, bottom = path.bounds()
    assert left < 0 < right or top < 0 < bottom
    assert max(abs(left), abs(top), abs(right), abs(bottom)) <= 12


def test_wave_path():
    path = shapes.wave_path(0, 10, 100, 3, 20)
    left, top, right, bottom = path.bounds()
    assert left == 0
    assert right >= 100
    assert top == pytest.approx(7)
    assert bottom == pytest.approx(13)
