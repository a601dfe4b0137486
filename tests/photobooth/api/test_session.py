import asyncio
import logging
import random

import pytest

from photobooth.api.models import Photo, ShapeOverlay, TextOverlay
from photobooth.api.session import (
    PhotoGallery,
    PhotoSelection,
    add_shape_overlay,
    add_text_overlay,
    capture_photo,
    move_overlay,
    remove_overlay,
    update_overlay,
)
from photobooth.constants import Filter, Frame, TextAlign

from ..utils import decode_pixels, make_data_uri

logger = logging.getLogger(__name__)


def _photo(name):
    return Photo("data:image/png;base64,", id=name)


def test_gallery_newest_first():
    gallery = PhotoGallery()
    for name in ("a", "b", "c"):
        gallery.add(_photo(name))
    assert [photo.id for photo in gallery] == ["c", "b", "a"]
    assert len(gallery) == 3
    assert gallery[0].id == "c"
    assert gallery.get("b").id == "b"
    assert gallery.get("z") is None


def test_gallery_remove():
    gallery = PhotoGallery([_photo("a"), _photo("b")])
    assert gallery.remove("a")
    assert not gallery.remove("a")
    assert [photo.id for photo in gallery] == ["b"]
    gallery.clear()
    assert len(gallery) == 0


def test_selection_capped():
    selection = PhotoSelection(2)
    assert selection.toggle("a")
    assert selection.toggle("b")
    assert selection.is_full
    assert not selection.toggle("c")
    assert selection.ids == ["a", "b"]
    assert "c" not in selection


def test_selection_deselect():
    selection = PhotoSelection(2)
    selection.toggle("a")
    selection.toggle("b")
    assert not selection.toggle("a")
    assert selection.toggle("c")
    assert selection.ids == ["b", "c"]


def test_selection_shrink():
    selection = PhotoSelection(4)
    for name in "abcd":
        selection.toggle(name)
    selection.max_slots = 2
    assert selection.ids == ["a", "b"]
    selection.clear()
    assert len(selection) == 0


def test_selection_photos():
    gallery = PhotoGallery([_photo("a"), _photo("b")])
    selection = PhotoSelection(3)
    for name in ("b", "x", "a"):
        selection.toggle(name)
    assert [photo.id for photo in selection.photos(gallery)] == ["b", "a"]


def test_add_text_overlay():
    overlays = []
    result = add_text_overlay(overlays)
    assert overlays == []
    (overlay,) = result
    assert isinstance(overlay, TextOverlay)
    assert overlay.text == "Your text"
    assert (overlay.x, overlay.y) == (0.5, 0.85)
    assert overlay.font_size == 36
    assert overlay.color == "#ffffff"
    assert overlay.bold
    assert overlay.align == TextAlign.CENTER
    assert overlay.outline_color == "#000000"
    assert overlay.outline_width == 4
    assert overlay.shadow_color == "rgba(0,0,0,0.4)"
    assert overlay.shadow_blur == 8


def test_add_text_overlay_custom():
    (overlay,) = add_text_overlay([], "Party", font_size=48)
    assert overlay.text == "Party"
    assert overlay.font_size == 48


@pytest.mark.parametrize("seed", range(5))
def test_add_shape_overlay(seed):
    (overlay,) = add_shape_overlay([], "heart", random.Random(seed))
    assert isinstance(overlay, ShapeOverlay)
    assert 0.1 <= overlay.x <= 0.9
    assert 0.15 <= overlay.y <= 0.85
    assert overlay.size == 28
    assert overlay.fill == "#f472b6"
    assert overlay.stroke == "#be185d"
    assert overlay.stroke_width == 2
    assert overlay.opacity == 1.0


def test_add_sparkle_overlay():
    (overlay,) = add_shape_overlay([], "sparkle", random.Random(0))
    assert overlay.fill == "#ffffff"
    assert overlay.stroke == "#ffffff"


def test_add_shape_overlay_unknown():
    with pytest.raises(ValueError):
        add_shape_overlay([], "unicorn")


@pytest.mark.parametrize(
    "x, y, expected",
    [(0.3, 0.4, (0.3, 0.4)), (-0.5, 1.5, (0.0, 1.0)), (2.0, -1.0, (1.0, 0.0))],
)
def test_move_overlay(x, y, expected):
    overlays = add_text_overlay([])
    original = overlays[0]
    moved = move_overlay(overlays, original.id, x, y)
    assert (moved[0].x, moved[0].y) == expected
    assert moved[0].id == original.id
    assert (original.x, original.y) == (0.5, 0.85)
    assert moved is not overlays


def test_update_overlay():
    overlays = add_shape_overlay(add_text_overlay([]), "star", random.Random(1))
    text, shape = overlays
    updated = update_overlay(overlays, shape.id, size=40, rotation=15)
    assert updated[0] is text
    assert updated[1].size == 40
    assert updated[1].rotation == 15
    assert shape.size == 28


def test_remove_overlay():
    overlays = add_text_overlay(add_text_overlay([]))
    result = remove_overlay(overlays, overlays[0].id)
    assert [o.id for o in result] == [overlays[1].id]
    assert len(overlays) == 2
    assert remove_overlay(overlays, "missing") == overlays


def test_capture_photo():
    source = make_data_uri((20, 10), (255, 0, 0, 255))
    photo = asyncio.run(capture_photo(source, "grayscale", "none"))
    assert photo.filter == Filter.GRAYSCALE
    assert photo.frame == Frame.NONE
    assert photo.image.startswith("data:image/png;base64,")
    assert tuple(decode_pixels(photo.image)[5, 10]) == (85, 85, 85, 255)


def test_capture_photo_failure():
    photo = asyncio.run(capture_photo(b"broken", "sepia", "neon"))
    assert photo.image == b"broken"
