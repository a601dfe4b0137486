"""
Page templates for collages.

A template decorates the whole canvas after every cell has been drawn:
borders, divider lines between grid cells, a banner shape and the title
caption centered in that banner.
"""

import logging
import math

from photobooth.composite import shapes
from photobooth.composite.paint import linear_gradient
from photobooth.composite.path import Path
from photobooth.composite.surface import Surface
from photobooth.composite.text import Font
from photobooth.constants import DEFAULT_TITLE, TemplateId, TextAlign, TextBaseline
from photobooth.registry import new_registry

logger = logging.getLogger(__name__)

TEMPLATES, register = new_registry(attribute="template_id")

_PASTEL_STOPS = ((0, "#fbcfe8"), (0.5, "#ddd6fe"), (1, "#bfdbfe"))


def draw_template(
    surface: Surface, template_id, title: str = "", rows: int = 1, cols: int = 1
) -> None:
    """
    Decorate the full surface with a page template.

    :param template_id: :py:class:`~photobooth.constants.TemplateId` or its
        string tag; ``none`` and unknown tags draw nothing.
    :param title: banner caption, ``PhotoBooth`` when empty.
    :param rows: grid rows, used for divider placement.
    :param cols: grid columns, used for divider placement.
    """
    template_id = TemplateId(template_id)
    func = TEMPLATES.get(template_id)
    if func is None:
        return
    logger.debug("Draw %s template", template_id.value)
    with surface.saved():
        func(surface, surface.width, surface.height, title or DEFAULT_TITLE, rows, cols)


def _caption(surface, text, x, y, size, color, outline=None):
    font = Font(max(8, int(size)), bold=True)
    if outline:
        width = max(2, size / 8.0)
        surface.stroke_text(
            text, x, y, outline, font, width, TextAlign.CENTER, TextBaseline.MIDDLE
        )
    surface.fill_text(text, x, y, color, font, TextAlign.CENTER, TextBaseline.MIDDLE)


def _ribbon_tail(x, y, h, direction) -> Path:
    """Notched ribbon end hanging off the banner edge at ``x``."""
    tail = h * 0.6 * direction
    return Path().polygon(
        (
            (x + tail, y + h * 0.2),
            (x, y + h * 0.2),
            (x, y + h),
            (x + tail, y + h),
            (x + tail * 0.6, y + h * 0.6),
        )
    )


def _dividers(width, height, rows, cols) -> Path:
    path = Path()
    for col in range(1, max(1, cols)):
        x = width * col / cols
        path.line(x, 0, x, height)
    for row in range(1, max(1, rows)):
        y = height * row / rows
        path.line(0, y, width, y)
    return path


@register(TemplateId.DUAL_STRIP_PINK)
def _draw_dual_strip_pink(surface, width, height, title, rows, cols):
    m = max(6, math.floor(min(width, height) * 0.02))
    surface.stroke(Path().rect(m / 2, m / 2, width - m, height - m), "#f472b6", m)
    surface.stroke(
        Path().rect(m * 1.5, m * 1.5, width - m * 3, height - m * 3), "#fbcfe8", 2
    )
    divider = Path().line(width / 2, m * 2, width / 2, height - m * 2)
    surface.stroke(divider, "rgba(236,72,153,0.6)", max(2, m // 2))

    banner_h = max(28, math.floor(height * 0.08))
    banner_w = width * 0.6
    bx, by = (width - banner_w) / 2, height - m * 2 - banner_h
    tails = Path()
    tails.extend(_ribbon_tail(bx, by, banner_h, -1))
    tails.extend(_ribbon_tail(bx + banner_w, by, banner_h, 1))
    surface.fill(tails, "#be185d")
    banner = Path().rounded_rect(bx, by, banner_w, banner_h, banner_h * 0.25)
    surface.fill(banner, "#ec4899")
    _caption(surface, title, width / 2, by + banner_h / 2, banner_h * 0.5, "#ffffff")


@register(TemplateId.CURVED_PASTEL_BOARD)
def _draw_curved_pastel_board(surface, width, height, title, rows, cols):
    m = max(8, math.floor(min(width, height) * 0.025))
    radius = max(16, math.floor(min(width, height) * 0.05))
    gradient = linear_gradient(0, 0, width, height, _PASTEL_STOPS)
    surface.stroke(
        Path().rounded_rect(m / 2, m / 2, width - m, height - m, radius), gradient, m
    )
    surface.stroke(
        _dividers(width, height, rows, cols), "rgba(255,255,255,0.8)", max(2, m // 3)
    )

    banner_h = max(32, math.floor(height * 0.09))
    banner_w = width * 0.7
    bx, by = (width - banner_w) / 2, m * 1.5
    sag = banner_h * 0.35
    banner = Path().move_to(bx, by)
    banner.quad_to(width / 2, by + sag, bx + banner_w, by)
    banner.line_to(bx + banner_w, by + banner_h)
    banner.quad_to(width / 2, by + banner_h + sag, bx, by + banner_h)
    banner.close()
    surface.fill(banner, linear_gradient(bx, 0, bx + banner_w, 0, _PASTEL_STOPS))
    surface.stroke(banner, "#ffffff", 2)
    center_y = by + banner_h / 2 + sag / 2
    _caption(surface, title, width / 2, center_y, banner_h * 0.45, "#7c3aed")


@register(TemplateId.STICKER_SHEET)
def _draw_sticker_sheet(surface, width, height, title, rows, cols):
    m = max(8, math.floor(min(width, height) * 0.025))
    surface.stroke(Path().rect(m / 2, m / 2, width - m, height - m), "#ffffff", m)
    surface.stroke(
        Path().rounded_rect(m, m, width - m * 2, height - m * 2, m), "#f9a8d4", 2
    )
    surface.stroke(_dividers(width, height, rows, cols), "rgba(249,168,212,0.7)", 2)

    size = max(10, math.floor(min(width, height) * 0.04))
    left, right = m * 2 + size, width - m * 2 - size
    top, bottom = m * 2 + size, height - m * 2 - size
    stickers = (
        (shapes.heart_path(size), "#ec4899", left, top),
        (shapes.star_path(size), "#facc15", right, top),
        (shapes.diamond_sparkle_path(size), "#38bdf8", left, bottom),
        (shapes.heart_path(size), "#a855f7", right, bottom),
    )
    for path, color, x, y in stickers:
        with surface.saved():
            surface.translate(x, y)
            surface.fill(path, color)
            surface.stroke(path, "#ffffff", 2)

    label_h = max(28, math.floor(height * 0.07))
    label_w = width * 0.5
    lx, ly = (width - label_w) / 2, m * 2
    label = Path().rounded_rect(lx, ly, label_w, label_h, label_h / 2)
    surface.fill(label, "#ffffff")
    surface.stroke(label, "#f472b6", 2)
    _caption(
        surface, title, width / 2, ly + label_h / 2, label_h * 0.5, "#db2777", "#fce7f3"
    )
