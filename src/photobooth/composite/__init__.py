"""
Raster compositing engine.

Everything is drawn onto a :py:class:`~photobooth.composite.surface.Surface`,
a canvas holding float32 colour and alpha planes with a save/restore state
stack. Vector paths are rasterized with ``aggdraw``, gradients are sampled
with ``scipy`` and shadows are blurred with ``scikit-image``.

Key modules:

- :py:mod:`photobooth.composite.surface`: drawing surface
- :py:mod:`photobooth.composite.filters`: pixel filters
- :py:mod:`photobooth.composite.frames`: decorative frame styles
- :py:mod:`photobooth.composite.overlays`: text and shape overlays
- :py:mod:`photobooth.composite.templates`: collage page templates

Example usage::

    from photobooth.composite import Surface, draw_frame

    surface = Surface(400, 300)
    surface.fill_rect(0, 0, 400, 300, "#fde2f3")
    draw_frame(surface, 0, 0, 400, 300, "polaroid")
    surface.topil().save("framed.png")
"""

from photobooth.composite.filters import apply_filter
from photobooth.composite.frames import draw_frame
from photobooth.composite.overlays import draw_overlays
from photobooth.composite.paint import LinearGradient, RadialGradient
from photobooth.composite.path import Path
from photobooth.composite.surface import Surface
from photobooth.composite.templates import draw_template

__all__ = [
    "LinearGradient",
    "Path",
    "RadialGradient",
    "Surface",
    "apply_filter",
    "draw_frame",
    "draw_overlays",
    "draw_template",
]
