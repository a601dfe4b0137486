import asyncio
import logging
import random

import numpy as np
import pytest

from photobooth.api import collage
from photobooth.api.collage import cell_origin, create_collage, grid_shape
from photobooth.api.models import CollageLayout, CollageOptions

from ..utils import BLUE, GREEN, RED, decode_pixels, make_data_uri

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255, 255)
SWATCH = (247, 247, 247, 255)


def _options(**kwargs):
    values = dict(cell_width=40, cell_height=30, padding=4, corner_radius=0)
    values.update(kwargs)
    return CollageOptions(**values)


def _center(index, cols, cell_width=40, cell_height=30):
    x, y = cell_origin(index, cols, cell_width, cell_height)
    return int(y + cell_height // 2), int(x + cell_width // 2)


@pytest.mark.parametrize(
    "rows, cols, count, vertical, expected",
    [
        (2, 2, 4, False, (2, 2)),
        (2, 3, 1, False, (2, 3)),
        (2, 2, 3, True, (3, 1)),
        (2, 2, 0, True, (1, 1)),
    ],
)
def test_grid_shape(rows, cols, count, vertical, expected):
    assert grid_shape(CollageLayout(rows, cols), count, vertical) == expected


def test_cell_origin():
    assert cell_origin(0, 3, 40, 30) == (0, 0)
    assert cell_origin(4, 3, 40, 30) == (40, 30)


def test_collage_grid_order():
    sources = [make_data_uri(color=c) for c in (RED, GREEN, BLUE, RED)]
    result = asyncio.run(create_collage(sources, (2, 2), _options()))
    pixels = decode_pixels(result)
    assert pixels.shape == (60, 80, 4)
    for index, color in enumerate((RED, GREEN, BLUE, RED)):
        assert tuple(pixels[_center(index, 2)]) == color
    # Padding shows the background.
    assert tuple(pixels[1, 1]) == WHITE


def test_collage_extra_sources_ignored():
    sources = [make_data_uri(color=c) for c in (RED, GREEN, BLUE)]
    result = asyncio.run(create_collage(sources, (1, 2), _options()))
    pixels = decode_pixels(result)
    assert pixels.shape == (30, 80, 4)
    assert tuple(pixels[_center(1, 2)]) == GREEN


def test_collage_extra_sources_in_grid():
    colors = [
        RED,
        GREEN,
        BLUE,
        (255, 255, 0, 255),
        (255, 0, 255, 255),
        (0, 255, 255, 255),
    ]
    sources = [make_data_uri(color=c) for c in colors]
    result = asyncio.run(create_collage(sources, {"rows": 2, "cols": 2}, _options()))
    pixels = decode_pixels(result)
    assert pixels.shape == (60, 80, 4)
    assert tuple(pixels[_center(0, 2)]) == colors[0]
    assert tuple(pixels[_center(3, 2)]) == colors[3]
    for color in colors[4:]:
        assert not np.all(pixels == color, axis=-1).any()


def test_collage_missing_cells_show_background():
    result = asyncio.run(create_collage([make_data_uri()], (1, 2), _options()))
    pixels = decode_pixels(result)
    assert tuple(pixels[_center(0, 2)]) == RED
    assert tuple(pixels[_center(1, 2)]) == WHITE


def test_collage_vertical():
    sources = [make_data_uri(color=c) for c in (RED, GREEN, BLUE)]
    result = asyncio.run(create_collage(sources, (2, 2), _options(vertical=True)))
    pixels = decode_pixels(result)
    assert pixels.shape == (90, 40, 4)
    for index, color in enumerate((RED, GREEN, BLUE)):
        assert tuple(pixels[_center(index, 1)]) == color


def test_collage_partial_failure():
    sources = [make_data_uri(color=RED), "data:image/png;base64,AAAA"]
    result = asyncio.run(create_collage(sources, (1, 2), _options()))
    pixels = decode_pixels(result)
    assert tuple(pixels[_center(0, 2)]) == RED
    assert tuple(pixels[_center(1, 2)]) == SWATCH


def test_collage_failed_last_cell_still_finalized():
    sources = [make_data_uri(color=RED), b"broken"]
    options = _options(style="modern", template_id="sticker-sheet")
    result = asyncio.run(create_collage(sources, (1, 2), options))
    assert result.startswith("data:image/png;base64,")


@pytest.mark.parametrize(
    "options", [{"cell_width": 0}, {"cell_height": -5}, {"cell_width": 100000}]
)
def test_collage_surface_failure(options):
    assert asyncio.run(create_collage([make_data_uri()], (2, 2), options)) == ""


def test_collage_empty():
    result = asyncio.run(create_collage([], (2, 2), _options(bg_color="#ff0000")))
    pixels = decode_pixels(result)
    assert pixels.shape == (60, 80, 4)
    assert np.all(pixels == RED)


def test_collage_background():
    result = asyncio.run(
        create_collage([make_data_uri()], (1, 1), _options(bg_color="#00ff00"))
    )
    assert tuple(decode_pixels(result)[0, 0]) == GREEN


@pytest.mark.parametrize("mask", ["none", "rounded", "circle", "oval"])
def test_collage_masks(mask):
    options = _options(mask=mask, corner_radius=10, padding=0)
    result = asyncio.run(create_collage([make_data_uri()], (1, 1), options))
    pixels = decode_pixels(result)
    assert tuple(pixels[15, 20]) == RED
    if mask in ("circle", "oval"):
        assert tuple(pixels[0, 0]) != RED


@pytest.mark.parametrize("style", ["classic", "polaroid", "emoji", "modern"])
def test_collage_styles(style):
    options = _options(cell_width=160, cell_height=120, style=style)
    result = asyncio.run(create_collage([make_data_uri()] * 2, (1, 2), options))
    assert decode_pixels(result).shape == (120, 320, 4)


def test_collage_frame_and_overlays():
    options = _options(
        cell_width=120,
        cell_height=90,
        frame="hearts",
        overlays=[{"type": "shape", "shape": "star", "x": 0.5, "y": 0.5}],
        template_id="dual-strip-pink",
        title="Hello",
    )
    plain_options = _options(cell_width=120, cell_height=90)
    plain = asyncio.run(create_collage([make_data_uri()], (1, 2), plain_options))
    decorated = asyncio.run(
        create_collage([make_data_uri()], (1, 2), options, random.Random(5))
    )
    assert plain != decorated


def test_collage_seeded():
    options = _options(cell_width=120, cell_height=90, frame="blossom")
    sources = [make_data_uri(color=GREEN)]
    results = [
        asyncio.run(create_collage(sources, (1, 1), options, random.Random(11)))
        for _ in range(2)
    ]
    assert results[0] == results[1]


def test_collage_overlay_url():
    options = _options(overlay_url=make_data_uri((10, 10), BLUE))
    result = asyncio.run(create_collage([make_data_uri()], (1, 1), options))
    assert tuple(decode_pixels(result)[15, 20]) == BLUE


def test_collage_cover_fit():
    wide = make_data_uri((200, 50), RED)
    options = _options(padding=0)
    pixels = decode_pixels(asyncio.run(create_collage([wide], (1, 1), options)))
    assert tuple(pixels[3, 20]) == RED
    assert tuple(pixels[26, 20]) == RED


def test_draw_cell_without_image():
    surface = collage.Surface(40, 30)
    collage.draw_cell(surface, 0, None, 1, _options())
    assert tuple(surface.get_pixels()[15, 20]) == SWATCH
