"""
Overlay renderer.

Overlays are drawn in list order, so earlier entries end up further back.
Each one is drawn inside its own saved state: the origin moves to
``(x * width, y * height)``, the axes rotate by ``rotation`` degrees and the
global alpha becomes ``opacity``. Unknown overlay types or shape kinds are
skipped.
"""

import logging
import math
from typing import Sequence

from photobooth.api.models import ShapeOverlay, TextOverlay, parse_overlay
from photobooth.composite import shapes
from photobooth.composite.surface import Surface
from photobooth.composite.text import Font
from photobooth.constants import ShapeKind, TextBaseline
from photobooth.registry import new_registry

logger = logging.getLogger(__name__)

SHAPES, register = new_registry()

_DEFAULT_STROKE_WIDTH = 2


def draw_overlays(
    surface: Surface, width: float, height: float, overlays: Sequence
) -> None:
    """
    Draw overlays with ``width`` x ``height`` as the coordinate basis.

    :param overlays: :py:class:`~photobooth.api.models.TextOverlay` and
        :py:class:`~photobooth.api.models.ShapeOverlay` objects or their
        dict forms. The sequence is not modified.
    """
    for value in overlays or ():
        overlay = parse_overlay(value)
        if overlay is None:
            continue
        with surface.saved():
            surface.translate(overlay.x * width, overlay.y * height)
            surface.rotate(math.radians(overlay.rotation or 0.0))
            surface.global_alpha = 1.0 if overlay.opacity is None else overlay.opacity
            if isinstance(overlay, TextOverlay):
                _draw_text(surface, overlay)
            elif isinstance(overlay, ShapeOverlay):
                _draw_shape(surface, overlay)


def _draw_text(surface: Surface, overlay: TextOverlay) -> None:
    font = Font(overlay.font_size, bool(overlay.bold), overlay.font_family)
    if overlay.outline_width and overlay.outline_width > 0:
        surface.stroke_text(
            overlay.text,
            0,
            0,
            overlay.outline_color or "#000000",
            font,
            width=overlay.outline_width,
            align=overlay.align,
            baseline=TextBaseline.MIDDLE,
        )
    if overlay.shadow_blur and overlay.shadow_blur > 0:
        shadow = overlay.shadow_color or "rgba(0,0,0,0.5)"
        surface.set_shadow(shadow, overlay.shadow_blur)
    surface.fill_text(
        overlay.text,
        0,
        0,
        overlay.color,
        font,
        align=overlay.align,
        baseline=TextBaseline.MIDDLE,
    )


def _draw_shape(surface: Surface, overlay: ShapeOverlay) -> None:
    try:
        kind = ShapeKind(overlay.shape)
    except ValueError:
        logger.debug("Skip overlay %s with unknown shape %r", overlay.id, overlay.shape)
        return
    SHAPES[kind](surface, overlay)


def _stroke_width(overlay: ShapeOverlay) -> float:
    if overlay.stroke_width is None:
        return _DEFAULT_STROKE_WIDTH
    return overlay.stroke_width


@register(ShapeKind.HEART)
def _draw_heart(surface, overlay):
    path = shapes.heart_path(overlay.size)
    surface.fill(path, overlay.fill)
    if overlay.stroke:
        surface.stroke(path, overlay.stroke, _stroke_width(overlay))


@register(ShapeKind.STAR)
def _draw_star(surface, overlay):
    path = shapes.star_path(overlay.size, overlay.size * 0.5)
    surface.fill(path, overlay.fill)
    if overlay.stroke:
        surface.stroke(path, overlay.stroke, _stroke_width(overlay))


@register(ShapeKind.SPARKLE)
def _draw_sparkle(surface, overlay):
    path = shapes.sparkle_path(overlay.size)
    surface.fill(path, overlay.fill)
    surface.stroke(path, overlay.stroke or overlay.fill, _stroke_width(overlay))
