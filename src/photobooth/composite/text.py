"""
Text rasterization.

Glyphs are rendered by Pillow into an ``L`` coverage image that is later
warped onto the surface like any other mask.
"""

import functools
import logging
from typing import Tuple

from attrs import define
from PIL import Image, ImageDraw, ImageFont

from photobooth.constants import TextAlign, TextBaseline

logger = logging.getLogger(__name__)

_FONT_FILES = {
    ("sans-serif", False): (
        "DejaVuSans.ttf",
        "LiberationSans-Regular.ttf",
        "Arial.ttf",
    ),
    ("sans-serif", True): (
        "DejaVuSans-Bold.ttf",
        "LiberationSans-Bold.ttf",
        "Arial Bold.ttf",
    ),
    ("serif", False): ("DejaVuSerif.ttf", "LiberationSerif-Regular.ttf", "Times.ttf"),
    ("serif", True): ("DejaVuSerif-Bold.ttf", "LiberationSerif-Bold.ttf"),
    ("monospace", False): ("DejaVuSansMono.ttf", "LiberationMono-Regular.ttf"),
    ("monospace", True): ("DejaVuSansMono-Bold.ttf", "LiberationMono-Bold.ttf"),
}

_ALIGN_ANCHOR = {
    TextAlign.LEFT: "l",
    TextAlign.CENTER: "m",
    TextAlign.RIGHT: "r",
}

_BASELINE_ANCHOR = {
    TextBaseline.ALPHABETIC: "s",
    TextBaseline.MIDDLE: "m",
    TextBaseline.TOP: "a",
    TextBaseline.BOTTOM: "d",
}


@define(frozen=True)
class Font:
    """Font request: pixel size, weight and generic family."""

    size: float = 16
    bold: bool = False
    family: str = "sans-serif"

    def load(self):
        return load_font(self.family, max(1, int(round(self.size))), self.bold)


@functools.lru_cache(maxsize=64)
def load_font(family: str, size: int, bold: bool = False):
    """
    Load a TrueType font for a generic family, falling back to Pillow's
    bundled default font.
    """
    family = family if (family, bold) in _FONT_FILES else "sans-serif"
    for name in _FONT_FILES[(family, bold)]:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    logger.debug("No TrueType font for %s, using the default font", family)
    return ImageFont.load_default(size=size)


def render_mask(
    text: str,
    font: Font,
    align=TextAlign.CENTER,
    baseline=TextBaseline.ALPHABETIC,
    stroke_width: int = 0,
) -> Tuple[Image.Image, Tuple[int, int]]:
    """
    Render ``text`` into a coverage image.

    :return: tuple of the ``L`` image and the offset of its top-left corner
        relative to the anchor point.
    """
    pil_font = font.load()
    stroke_width = max(0, int(stroke_width))
    if isinstance(pil_font, ImageFont.FreeTypeFont):
        anchor = _ALIGN_ANCHOR[TextAlign(align)] + _BASELINE_ANCHOR[
            TextBaseline(baseline)
        ]
    else:
        anchor = None
    bbox = pil_font.getbbox(text, stroke_width=stroke_width, anchor=anchor)
    left, top, right, bottom = (int(v) for v in bbox)
    width, height = max(1, right - left), max(1, bottom - top)
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text(
        (-left, -top),
        text,
        font=pil_font,
        fill=255,
        anchor=anchor,
        stroke_width=stroke_width,
        stroke_fill=255,
    )
    return image, (left, top)
