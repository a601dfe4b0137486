"""
Single-image pipeline.

decode -> draw at natural size -> filter -> frame -> overlays -> PNG data URI.
Decode and surface failures resolve with the untouched source.
"""

import logging
import random
from typing import Optional, Sequence

from PIL import Image

from photobooth.api.pil_io import Source, encode_data_uri, load_image
from photobooth.composite.filters import apply_filter
from photobooth.composite.frames import draw_frame
from photobooth.composite.overlays import draw_overlays
from photobooth.composite.surface import Surface
from photobooth.constants import Filter, Frame
from photobooth.exceptions import SurfaceError

logger = logging.getLogger(__name__)


def render_image(
    image: Image.Image,
    filter=Filter.NONE,
    frame=Frame.NONE,
    overlays: Optional[Sequence] = None,
    rng: Optional[random.Random] = None,
) -> Surface:
    """
    Render one decoded image onto a new surface of the same size.

    The pixel read-back is skipped entirely for the ``none`` filter.

    :raise SurfaceError: when the surface cannot be allocated.
    """
    surface = Surface(image.width, image.height)
    surface.draw_image(image, 0, 0)
    filter = Filter(filter)
    if filter != Filter.NONE:
        surface.put_pixels(apply_filter(surface.get_pixels(), filter))
    draw_frame(surface, 0, 0, surface.width, surface.height, frame, rng)
    draw_overlays(surface, surface.width, surface.height, overlays or ())
    return surface


async def _render(source, filter, frame, overlays, rng):
    image = await load_image(source)
    if image is None:
        return source
    try:
        surface = render_image(image, filter, frame, overlays, rng)
    except SurfaceError as e:
        logger.error("Cannot render image: %s", e)
        return source
    return encode_data_uri(surface.topil())


async def apply_filter_to_image(source: Source, filter):
    """
    Apply a pixel filter to an image source.

    :return: PNG data URI, or ``source`` itself for the ``none`` filter or
        when the source cannot be decoded.
    """
    if Filter(filter) == Filter.NONE:
        return source
    return await _render(source, filter, Frame.NONE, (), None)


async def apply_filter_and_frame_to_image(
    source: Source, filter, frame, rng: Optional[random.Random] = None
):
    """Apply a pixel filter, then draw a frame over the whole image."""
    return await _render(source, filter, frame, (), rng)


async def apply_filter_frame_and_overlays_to_image(
    source: Source,
    filter,
    frame,
    overlays: Optional[Sequence] = None,
    rng: Optional[random.Random] = None,
):
    """
    Apply a pixel filter, a frame and overlays using the full image as the
    coordinate basis.
    """
    return await _render(source, filter, frame, overlays or (), rng)
