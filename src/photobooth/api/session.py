"""
In-memory session state.

The gallery, the collage selection and the overlay editing helpers hold no
rendering logic. Overlay helpers always return a new list and leave the
caller's list untouched.
"""

import logging
import random
from typing import Iterator, List, Optional, Sequence

import attrs

from photobooth.api.models import (
    Overlay,
    Photo,
    ShapeOverlay,
    TextOverlay,
    parse_overlays,
)
from photobooth.api.pil_io import Source
from photobooth.api.pipeline import apply_filter_frame_and_overlays_to_image
from photobooth.constants import Filter, Frame, ShapeKind

logger = logging.getLogger(__name__)

SHAPE_FILL = "#f472b6"
SHAPE_STROKE = "#be185d"
SPARKLE_COLOR = "#ffffff"


class PhotoGallery(object):
    """Captured photos, newest first."""

    def __init__(self, photos: Sequence[Photo] = ()):
        self._photos = list(photos)

    def __len__(self) -> int:
        return len(self._photos)

    def __iter__(self) -> Iterator[Photo]:
        return iter(self._photos)

    def __getitem__(self, index) -> Photo:
        return self._photos[index]

    def __repr__(self) -> str:
        return "%s(size=%d)" % (self.__class__.__name__, len(self))

    def add(self, photo: Photo) -> Photo:
        self._photos.insert(0, photo)
        return photo

    def remove(self, photo_id: str) -> bool:
        """Delete a photo by id. Returns True when a photo was removed."""
        for index, photo in enumerate(self._photos):
            if photo.id == photo_id:
                del self._photos[index]
                return True
        return False

    def get(self, photo_id: str) -> Optional[Photo]:
        for photo in self._photos:
            if photo.id == photo_id:
                return photo
        return None

    def clear(self) -> None:
        self._photos.clear()


class PhotoSelection(object):
    """
    Ordered selection of photo ids for a collage, capped at ``max_slots``.

    Selecting beyond the cap is silently ignored.
    """

    def __init__(self, max_slots: int):
        self._max_slots = max(0, int(max_slots))
        self._ids: List[str] = []

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __contains__(self, photo_id) -> bool:
        return photo_id in self._ids

    def __repr__(self) -> str:
        return "%s(%d/%d)" % (self.__class__.__name__, len(self), self._max_slots)

    @property
    def max_slots(self) -> int:
        return self._max_slots

    @max_slots.setter
    def max_slots(self, value: int) -> None:
        self._max_slots = max(0, int(value))
        del self._ids[self._max_slots :]

    @property
    def ids(self) -> List[str]:
        return list(self._ids)

    @property
    def is_full(self) -> bool:
        return len(self._ids) >= self._max_slots

    def toggle(self, photo_id: str) -> bool:
        """
        Select or deselect ``photo_id``.

        :return: True when the photo is selected afterwards.
        """
        if photo_id in self._ids:
            self._ids.remove(photo_id)
            return False
        if self.is_full:
            logger.debug("Selection is full, ignore %s", photo_id)
            return False
        self._ids.append(photo_id)
        return True

    def clear(self) -> None:
        self._ids.clear()

    def photos(self, gallery: PhotoGallery) -> List[Photo]:
        """Selected photos in selection order, skipping deleted ones."""
        photos = (gallery.get(photo_id) for photo_id in self._ids)
        return [photo for photo in photos if photo is not None]


def add_text_overlay(overlays: Sequence[Overlay], text: str = "Your text", **kwargs):
    """Append a text overlay with the editor defaults."""
    options = dict(
        text=text,
        x=0.5,
        y=0.85,
        font_size=36,
        color="#ffffff",
        bold=True,
        outline_color="#000000",
        outline_width=4,
        shadow_color="rgba(0,0,0,0.4)",
        shadow_blur=8,
    )
    options.update(kwargs)
    return list(overlays) + [TextOverlay(**options)]


def add_shape_overlay(
    overlays: Sequence[Overlay], shape=ShapeKind.HEART, rng=None, **kwargs
):
    """
    Append a shape overlay at a random position in the central area of the
    canvas.
    """
    rng = rng or random.Random()
    shape = ShapeKind(shape)
    color = SPARKLE_COLOR if shape == ShapeKind.SPARKLE else None
    options = dict(
        shape=shape.value,
        x=0.1 + rng.random() * 0.8,
        y=0.15 + rng.random() * 0.7,
        size=28,
        fill=color or SHAPE_FILL,
        stroke=color or SHAPE_STROKE,
        stroke_width=2,
        opacity=1.0,
    )
    options.update(kwargs)
    return list(overlays) + [ShapeOverlay(**options)]


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def move_overlay(overlays: Sequence[Overlay], overlay_id: str, x: float, y: float):
    """Move an overlay to a normalized position clamped to the canvas."""
    return update_overlay(overlays, overlay_id, x=_clamp(x), y=_clamp(y))


def update_overlay(overlays: Sequence[Overlay], overlay_id: str, **changes):
    """Return a copy of ``overlays`` with the given fields of one overlay changed."""
    return [
        attrs.evolve(overlay, **changes) if overlay.id == overlay_id else overlay
        for overlay in overlays
    ]


def remove_overlay(overlays: Sequence[Overlay], overlay_id: str):
    return [overlay for overlay in overlays if overlay.id != overlay_id]


async def capture_photo(
    source: Source,
    filter=Filter.NONE,
    frame=Frame.NONE,
    overlays: Optional[Sequence] = None,
    rng: Optional[random.Random] = None,
) -> Photo:
    """
    Render a captured still and wrap it into a :py:class:`Photo` record.

    When rendering fails the record carries the untouched source.
    """
    overlays = parse_overlays(overlays)
    image = await apply_filter_frame_and_overlays_to_image(
        source, filter, frame, overlays, rng
    )
    return Photo(image=image, filter=filter, frame=frame, overlays=overlays)
