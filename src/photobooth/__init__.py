"""
photobooth: compositing engine for photo-booth style images.

Captured stills are filtered, framed and decorated with text and shape
overlays, then composed into grid collages or animated GIFs. Results are PNG
(or GIF) data URIs.

Basic usage::

    import asyncio

    from photobooth import apply_filter_frame_and_overlays_to_image

    uri = asyncio.run(
        apply_filter_frame_and_overlays_to_image("still.png", "vintage", "polaroid")
    )

Architecture:

- :py:mod:`photobooth.api`: async user-facing API (primary interface)
- :py:mod:`photobooth.composite`: drawing surface, filters, frames and overlays
"""

from photobooth.api.collage import create_collage
from photobooth.api.gif import GifResult, create_gif, encode_gif
from photobooth.api.models import (
    CollageLayout,
    CollageOptions,
    Photo,
    ShapeOverlay,
    TextOverlay,
)
from photobooth.api.pil_io import download_image
from photobooth.api.pipeline import (
    apply_filter_and_frame_to_image,
    apply_filter_frame_and_overlays_to_image,
    apply_filter_to_image,
)
from photobooth.composite.filters import apply_filter
from photobooth.version import __version__

__all__ = [
    "CollageLayout",
    "CollageOptions",
    "GifResult",
    "Photo",
    "ShapeOverlay",
    "TextOverlay",
    "__version__",
    "apply_filter",
    "apply_filter_and_frame_to_image",
    "apply_filter_frame_and_overlays_to_image",
    "apply_filter_to_image",
    "create_collage",
    "create_gif",
    "download_image",
    "encode_gif",
]
