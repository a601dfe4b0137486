"""
Collage compositor.

Sources are tiled row-major into a grid of fixed-size cells. Every selected
source starts decoding immediately; each cell is drawn as soon as its source
settles, and page decoration runs once all of them have settled. A source
that fails to decode leaves only its cell swatch.
"""

import asyncio
import logging
import math
import random
from typing import Optional, Sequence

from PIL import Image

from photobooth.api.models import CollageLayout, CollageOptions
from photobooth.api.pil_io import encode_data_uri, load_image
from photobooth.composite.frames import draw_frame
from photobooth.composite.overlays import draw_overlays
from photobooth.composite.path import Path
from photobooth.composite.surface import Surface
from photobooth.composite.templates import draw_template
from photobooth.composite.text import Font
from photobooth.constants import (
    EMOJI_COLOR,
    MODERN_TITLE,
    CollageStyle,
    Frame,
    Mask,
    TemplateId,
    TextAlign,
)
from photobooth.exceptions import SurfaceError

logger = logging.getLogger(__name__)

_BORDER_COLOR = "rgba(0,0,0,0.06)"


def grid_shape(layout: CollageLayout, count: int, vertical: bool = False):
    """
    Effective (rows, cols) of a collage. Vertical strips stack every source in
    a single column.
    """
    if vertical:
        return max(1, count), 1
    return layout.rows, layout.cols


def cell_origin(index: int, cols: int, cell_width: float, cell_height: float):
    """Top-left pixel of the cell holding the ``index``-th source."""
    row, col = divmod(index, cols)
    return col * cell_width, row * cell_height


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))


def _mask_path(mask: Mask, x, y, w, h, radius) -> Path:
    if mask == Mask.CIRCLE:
        return Path().circle(x + w / 2, y + h / 2, min(w, h) / 2)
    if mask == Mask.OVAL:
        return Path().ellipse(x + w / 2, y + h / 2, w / 2, h / 2)
    if mask == Mask.ROUNDED:
        return Path().rounded_rect(x, y, w, h, radius)
    return Path().rect(x, y, w, h)


def draw_cell(
    surface: Surface,
    index: int,
    image: Optional[Image.Image],
    cols: int,
    options: CollageOptions,
    rng: Optional[random.Random] = None,
) -> None:
    """
    Draw one collage cell: swatch, masked cover image, frame, style
    decoration and hairline border. A missing ``image`` leaves the swatch only.
    """
    x, y = cell_origin(index, cols, options.cell_width, options.cell_height)
    padding, radius = options.padding, options.corner_radius
    inner_x, inner_y = x + padding, y + padding
    inner_w = options.cell_width - padding * 2
    inner_h = options.cell_height - padding * 2

    swatch = "#ffffff" if options.style == CollageStyle.POLAROID else "#f7f7f7"
    area = Path().rounded_rect(inner_x, inner_y, inner_w, inner_h, radius)
    surface.fill(area, swatch)
    if image is None:
        logger.debug("Cell %d has no image", index)
        return
    if inner_w <= 0 or inner_h <= 0:
        return

    with surface.saved():
        mask = _mask_path(options.mask, inner_x, inner_y, inner_w, inner_h, radius)
        surface.clip(mask)
        ratio = max(inner_w / image.width, inner_h / image.height)
        draw_w, draw_h = image.width * ratio, image.height * ratio
        surface.draw_image(
            image,
            inner_x - (draw_w - inner_w) / 2,
            inner_y - (draw_h - inner_h) / 2,
            draw_w,
            draw_h,
        )

    if options.frame != Frame.NONE:
        draw_frame(surface, inner_x, inner_y, inner_w, inner_h, options.frame, rng)

    if options.style == CollageStyle.POLAROID:
        strip = _round(inner_h * 0.14)
        surface.fill_rect(inner_x, inner_y + inner_h - strip, inner_w, strip, "#fff")
        surface.fill_text(
            "Photo",
            inner_x + inner_w / 2,
            inner_y + inner_h - strip / 2 + 6,
            "#666",
            Font(max(12, strip / 3)),
            align=TextAlign.CENTER,
        )
    elif options.style == CollageStyle.EMOJI:
        emojis = options.emojis
        emoji = emojis[index % len(emojis)] or "✨"
        surface.fill_text(
            emoji,
            inner_x + inner_w - 8,
            inner_y + 24,
            EMOJI_COLOR,
            Font(_round(min(inner_w, inner_h) / 6), family="serif"),
            align=TextAlign.RIGHT,
        )

    if options.mask in (Mask.CIRCLE, Mask.OVAL):
        border = _mask_path(options.mask, inner_x, inner_y, inner_w, inner_h, radius)
    else:
        border = area
    surface.stroke(border, _BORDER_COLOR, 2)


async def _finalize(surface: Surface, options: CollageOptions, rows: int, cols: int):
    if options.overlay_url:
        overlay = await load_image(options.overlay_url)
        if overlay is not None:
            surface.draw_image(overlay, 0, 0, surface.width, surface.height)
    if options.template_id != TemplateId.NONE:
        draw_template(surface, options.template_id, options.title, rows, cols)
    draw_overlays(surface, surface.width, surface.height, options.overlays)
    if options.style == CollageStyle.MODERN:
        surface.fill_text(
            MODERN_TITLE,
            surface.width / 2,
            60,
            "rgba(255,255,255,0.9)",
            Font(48, family="serif"),
            align=TextAlign.CENTER,
        )


async def create_collage(
    sources: Sequence,
    layout,
    options=None,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Compose image sources into a grid collage.

    :param sources: image sources; only the first ``rows * cols`` are used.
    :param layout: :py:class:`~photobooth.api.models.CollageLayout`, a
        ``{"rows": r, "cols": c}`` dict or a ``(rows, cols)`` pair.
    :param options: :py:class:`~photobooth.api.models.CollageOptions` or a
        dict of option names.
    :param rng: random source for scatter frames.
    :return: PNG data URI, or an empty string when the canvas cannot be
        allocated.
    """
    layout = CollageLayout.from_value(layout)
    options = CollageOptions.from_value(options)
    sources = list(sources or ())
    rows, cols = grid_shape(layout, len(sources), options.vertical)

    try:
        surface = Surface(options.cell_width * cols, options.cell_height * rows)
    except SurfaceError as e:
        logger.error("Cannot create collage canvas: %s", e)
        return ""
    surface.fill_rect(0, 0, surface.width, surface.height, options.bg_color)

    selected = sources[: max(0, rows * cols)]
    if not selected:
        return encode_data_uri(surface.topil())
    if len(sources) > len(selected):
        logger.debug(
            "Drop %d sources beyond %d cells",
            len(sources) - len(selected),
            len(selected),
        )

    rng = rng or random.Random()
    cell_rngs = [random.Random(rng.random()) for _ in selected]
    loads = [asyncio.ensure_future(load_image(source)) for source in selected]

    async def settle(index: int) -> None:
        image = await loads[index]
        draw_cell(surface, index, image, cols, options, cell_rngs[index])

    await asyncio.gather(*(settle(index) for index in range(len(selected))))
    await _finalize(surface, options, rows, cols)
    return encode_data_uri(surface.topil())
