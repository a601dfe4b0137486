"""
Frame decorator.

Every frame style is an independent procedure drawing into the rectangle
``(x0, y0, w, h)`` of a surface. Paddings, radii and line widths derive from
``min(w, h)`` with a per-style pixel floor, so styles scale with the target and
never fail on degenerate rectangles.

Scatter styles place glyphs at random positions restricted to the edge band
outside an inner padded rectangle. They draw from ``rng``; when no generator
is given a fresh unseeded one is used, so repeated renders differ.
"""

import logging
import math
import random
from typing import Iterator, Optional, Tuple

from photobooth.composite import shapes
from photobooth.composite.paint import linear_gradient, radial_gradient
from photobooth.composite.path import Path
from photobooth.composite.surface import Surface
from photobooth.composite.text import Font
from photobooth.constants import Frame, TextAlign, TextBaseline
from photobooth.registry import new_registry

logger = logging.getLogger(__name__)

FRAMES, register = new_registry(attribute="frame")

_CONFETTI = ("#ef4444", "#f59e0b", "#10b981", "#3b82f6", "#eab308", "#a855f7")
_PASTELS = ("#fbcfe8", "#fde68a", "#bbf7d0", "#bfdbfe", "#ddd6fe")
_PINKS = ("#ec4899", "#f472b6", "#fb7185", "#f9a8d4")
_GOLD_STOPS = ((0, "#c59d5f"), (0.5, "#ffd700"), (1, "#c59d5f"))


def draw_frame(
    surface: Surface,
    x0: float,
    y0: float,
    w: float,
    h: float,
    frame,
    rng: Optional[random.Random] = None,
) -> None:
    """
    Draw a decorative frame into the given rectangle.

    :param frame: :py:class:`~photobooth.constants.Frame` or its string tag;
        ``none`` and unknown tags draw nothing.
    :param rng: random source for scatter styles.
    """
    frame = Frame(frame)
    func = FRAMES.get(frame)
    if func is None:
        return
    logger.debug("Draw %s frame in (%g, %g, %g, %g)", frame.value, x0, y0, w, h)
    with surface.saved():
        func(surface, x0, y0, w, h, rng or random.Random())


def _pad(w: float, h: float, ratio: float, minimum: int) -> int:
    return max(minimum, int(math.floor(min(w, h) * ratio)))


def _inset(x0, y0, w, h, inset, radius) -> Path:
    return Path().rounded_rect(
        x0 + inset, y0 + inset, w - inset * 2, h - inset * 2, radius
    )


def _dot(surface: Surface, x: float, y: float, r: float, paint) -> None:
    surface.fill(Path().circle(x, y, r), paint)


def _band(x0, y0, w, h, band) -> Path:
    """Four non-overlapping rectangles covering the edge band."""
    path = Path()
    path.rect(x0, y0, w, band)
    path.rect(x0, y0 + h - band, w, band)
    path.rect(x0, y0 + band, band, h - band * 2)
    path.rect(x0 + w - band, y0 + band, band, h - band * 2)
    return path


def _corners(x0, y0, w, h, inset) -> Tuple[Tuple[float, float], ...]:
    return (
        (x0 + inset, y0 + inset),
        (x0 + w - inset, y0 + inset),
        (x0 + inset, y0 + h - inset),
        (x0 + w - inset, y0 + h - inset),
    )


def edge_scatter(
    rng: random.Random, x0, y0, w, h, inset: float, attempts: int
) -> Iterator[Tuple[float, float]]:
    """
    Yield random points of the rectangle that fall outside the inner
    rectangle inset by ``inset``. Points inside are dropped, so fewer than
    ``attempts`` points come out.
    """
    for _ in range(attempts):
        rx = x0 + rng.random() * w
        ry = y0 + rng.random() * h
        if (
            rx < x0 + inset
            or rx > x0 + w - inset
            or ry < y0 + inset
            or ry > y0 + h - inset
        ):
            yield rx, ry


def _glyph(surface: Surface, path: Path, x, y, angle, fill, stroke=None, width=2):
    with surface.saved():
        surface.translate(x, y)
        surface.rotate(angle)
        if fill:
            surface.fill(path, fill)
        if stroke:
            surface.stroke(path, stroke, width)


@register(Frame.POLAROID)
def _draw_polaroid(surface, x0, y0, w, h, rng):
    t = _pad(w, h, 0.02, 8)
    b = t * 3
    paint = "rgba(255,255,255,0.95)"
    surface.fill_rect(x0, y0, w, t, paint)
    surface.fill_rect(x0, y0 + h - b, w, b, paint)
    surface.fill_rect(x0, y0, t, h, paint)
    surface.fill_rect(x0 + w - t, y0, t, h, paint)
    surface.fill_text(
        "PhotoBooth",
        x0 + w / 2,
        y0 + h - b // 2,
        "rgba(0,0,0,0.15)",
        Font(max(12, b // 3)),
        align=TextAlign.CENTER,
    )


@register(Frame.FILM)
def _draw_film(surface, x0, y0, w, h, rng):
    bar = _pad(w, h, 0.03, 10)
    surface.fill_rect(x0, y0, bar, h, "rgba(0,0,0,0.9)")
    surface.fill_rect(x0 + w - bar, y0, bar, h, "rgba(0,0,0,0.9)")
    hole = max(3, int(math.floor(bar * 0.25)))
    holes = Path()
    y = y0 + hole * 2
    while y < y0 + h - hole * 2:
        holes.circle(x0 + bar // 2, y, hole)
        holes.circle(x0 + w - bar // 2, y, hole)
        y += hole * 3
    surface.fill(holes, "rgba(255,255,255,0.85)")


@register(Frame.NEON)
def _draw_neon(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.03, 10)
    surface.set_shadow("#a78bfa", max(10, pad))
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.8)),
        "#7c3aed",
        max(3, math.floor(pad * 0.4)),
    )


@register(Frame.GOLD)
def _draw_gold(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.025, 8)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.6)),
        linear_gradient(x0, y0, x0 + w, y0 + h, _GOLD_STOPS),
        max(6, math.floor(pad * 0.7)),
    )


@register(Frame.TAPE)
def _draw_tape(surface, x0, y0, w, h, rng):
    tape_w = _pad(w, h, 0.12, 40)
    tape_h = max(14, int(math.floor(tape_w * 0.35)))
    pad = _pad(w, h, 0.025, 8)
    strip = Path().rect(-tape_w / 2, -tape_h / 2, tape_w, tape_h)
    placements = (
        (x0 + pad + tape_w / 2, y0 + pad + tape_h / 2, -10),
        (x0 + w - pad - tape_w / 2, y0 + pad + tape_h / 2, 8),
        (x0 + pad + tape_w / 2, y0 + h - pad - tape_h / 2, 12),
        (x0 + w - pad - tape_w / 2, y0 + h - pad - tape_h / 2, -7),
    )
    for x, y, degrees in placements:
        _glyph(
            surface,
            strip,
            x,
            y,
            math.radians(degrees),
            "rgba(255, 247, 209, 0.9)",
            "rgba(0,0,0,0.12)",
            1,
        )


@register(Frame.CHRISTMAS)
def _draw_christmas(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.03, 10)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.6)),
        linear_gradient(x0, y0, x0 + w, y0 + h, ((0, "#ef4444"), (1, "#22c55e"))),
        max(8, math.floor(pad * 0.7)),
    )
    snow = Path()
    for x, y in edge_scatter(rng, x0, y0, w, h, pad * 1.5, 40):
        snow.circle(x, y, rng.random() * 2 + 1)
    surface.fill(snow, "rgba(255,255,255,0.9)")


@register(Frame.TET)
def _draw_tet(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.03, 10)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.4)),
        "#dc2626",
        max(10, math.floor(pad * 0.8)),
    )
    surface.stroke(
        _inset(x0, y0, w, h, pad * 1.8, math.floor(pad * 0.3)),
        "#f59e0b",
        max(3, math.floor(pad * 0.25)),
    )
    d = max(5, math.floor(pad * 0.5))
    for x, y in _corners(x0, y0, w, h, pad * 1.2):
        _dot(surface, x, y, d, "#f59e0b")


@register(Frame.BIRTHDAY)
def _draw_birthday(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.025, 8)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.6)),
        "#9333ea",
        max(4, math.floor(pad * 0.5)),
    )
    for x, y in edge_scatter(rng, x0, y0, w, h, pad * 1.2, 60):
        r = rng.random() * 3 + 1.5
        _dot(surface, x, y, r, _CONFETTI[int(rng.random() * len(_CONFETTI))])


@register(Frame.WEDDING)
def _draw_wedding(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.025, 8)
    vignette = radial_gradient(
        x0 + w / 2,
        y0 + h / 2,
        min(w, h) / 4,
        max(w, h) / 1.2,
        ((0, "rgba(255,255,255,0)"), (1, "rgba(255,255,255,0.35)")),
    )
    surface.fill(Path().rounded_rect(x0, y0, w, h, math.floor(pad * 0.4)), vignette)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.5)),
        linear_gradient(x0, y0, x0 + w, y0 + h, _GOLD_STOPS),
        max(3, math.floor(pad * 0.4)),
    )


@register(Frame.PASTEL_1)
def _draw_pastel_1(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.03, 8)
    stops = [(i / (len(_PASTELS) - 1), color) for i, color in enumerate(_PASTELS)]
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.8)),
        linear_gradient(x0, y0, x0 + w, y0 + h, stops),
        max(8, math.floor(pad * 0.9)),
    )
    r = max(4, math.floor(pad * 0.45))
    for index, (x, y) in enumerate(_corners(x0, y0, w, h, pad * 1.2)):
        _dot(surface, x, y, r, _PASTELS[index % len(_PASTELS)])


@register(Frame.PASTEL_2)
def _draw_pastel_2(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.03, 8)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.8)),
        linear_gradient(x0, y0, x0 + w, y0 + h, ((0, "#fed7aa"), (1, "#fbcfe8"))),
        max(8, math.floor(pad * 0.9)),
    )
    surface.stroke(
        _inset(x0, y0, w, h, pad * 1.8, math.floor(pad * 0.5)),
        "rgba(255,255,255,0.9)",
        max(2, math.floor(pad * 0.2)),
    )


@register(Frame.OCEAN)
def _draw_ocean(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.03, 10)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.6)),
        linear_gradient(x0, y0, x0, y0 + h, ((0, "#38bdf8"), (1, "#1d4ed8"))),
        max(8, math.floor(pad * 0.8)),
    )
    amplitude = max(2, pad * 0.3)
    period = max(12, pad * 2)
    with surface.saved():
        surface.clip(Path().rect(x0, y0, w, h))
        for y in (y0 + pad * 0.5, y0 + h - pad * 0.5):
            surface.stroke(
                shapes.wave_path(x0, y, w, amplitude, period),
                "rgba(255,255,255,0.8)",
                max(2, math.floor(pad * 0.2)),
            )
    bubbles = Path()
    for x, y in edge_scatter(rng, x0, y0, w, h, pad * 1.5, 30):
        bubbles.circle(x, y, rng.random() * 3 + 1.5)
    surface.fill(bubbles, "rgba(255,255,255,0.7)")


@register(Frame.SCHOOL)
def _draw_school(surface, x0, y0, w, h, rng):
    band = _pad(w, h, 0.05, 12)
    spacing = max(6, band // 3)
    with surface.saved():
        area = _band(x0, y0, w, h, band)
        surface.clip(area)
        surface.fill(area, "#fefce8")
        rules = Path()
        y = y0 + spacing
        while y < y0 + h:
            rules.line(x0, y, x0 + w, y)
            y += spacing
        surface.stroke(rules, "rgba(59,130,246,0.35)", 1)
        margin = x0 + band * 0.7
        surface.stroke(
            Path().line(margin, y0, margin, y0 + h),
            "rgba(239,68,68,0.6)",
            max(1, math.floor(band * 0.08)),
        )
    pin = max(4, math.floor(band * 0.3))
    for x in (x0 + w * 0.25, x0 + w * 0.75):
        _dot(surface, x, y0 + band / 2, pin, "#ef4444")
        shine = (x - pin * 0.3, y0 + band / 2 - pin * 0.3)
        _dot(surface, shine[0], shine[1], pin * 0.35, "rgba(255,255,255,0.7)")


@register(Frame.BUBBLE)
def _draw_bubble(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.03, 8)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.8)),
        "#f9a8d4",
        max(6, math.floor(pad * 0.7)),
    )
    colors = (
        "rgba(244,114,182,0.45)",
        "rgba(147,197,253,0.45)",
        "rgba(196,181,253,0.45)",
    )
    for x, y in edge_scatter(rng, x0, y0, w, h, pad * 1.5, 40):
        bubble = Path().circle(x, y, rng.random() * 4 + 2)
        surface.fill(bubble, colors[int(rng.random() * len(colors))])
        surface.stroke(bubble, "rgba(255,255,255,0.8)", 1)


@register(Frame.STICKER)
def _draw_sticker(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.025, 8)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.6)),
        "#a855f7",
        max(4, math.floor(pad * 0.5)),
    )
    size = _pad(w, h, 0.05, 8)
    glyphs = (
        (shapes.heart_path(size * 0.6), "#ec4899"),
        (shapes.star_path(size * 0.7), "#f59e0b"),
        (shapes.diamond_sparkle_path(size * 0.7), "#38bdf8"),
    )
    places = _corners(x0, y0, w, h, pad * 2) + (
        (x0 + w / 2, y0 + pad * 2),
        (x0 + w / 2, y0 + h - pad * 2),
    )
    badge = Path().circle(0, 0, size)
    for index, (x, y) in enumerate(places):
        angle = (rng.random() - 0.5) * 0.6
        _glyph(surface, badge, x, y, 0, "#ffffff", "#e9d5ff", 2)
        path, color = glyphs[index % len(glyphs)]
        _glyph(surface, path, x, y, angle, color)


@register(Frame.COMIC)
def _draw_comic(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.025, 8)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.3)),
        "#111111",
        max(6, math.floor(pad * 0.8)),
    )
    spacing = max(6, math.floor(pad * 0.9))
    dots = Path()
    for i in range(5):
        for j in range(5 - i):
            r = spacing * 0.35 * (1 - (i + j) / 6.0)
            dots.circle(x0 + pad * 1.5 + i * spacing, y0 + pad * 1.5 + j * spacing, r)
            dots.circle(
                x0 + w - pad * 1.5 - i * spacing, y0 + h - pad * 1.5 - j * spacing, r
            )
    surface.fill(dots, "rgba(239,68,68,0.8)")
    outer = _pad(w, h, 0.09, 14)
    cx, cy = x0 + w - pad * 1.5 - outer, y0 + pad * 1.5 + outer
    burst = shapes.starburst_path(outer, outer * 0.65, 12)
    _glyph(surface, burst, cx, cy, -0.2, "#facc15", "#111111", 2)
    with surface.saved():
        surface.translate(cx, cy)
        surface.rotate(-0.2)
        surface.fill_text(
            "POP!",
            0,
            0,
            "#ef4444",
            Font(max(10, outer // 2), bold=True),
            align=TextAlign.CENTER,
            baseline=TextBaseline.MIDDLE,
        )


@register(Frame.FLOWER)
def _draw_flower(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.025, 8)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.6)),
        "#86efac",
        max(4, math.floor(pad * 0.5)),
    )
    radius = _pad(w, h, 0.06, 8)
    petals, center = shapes.flower_paths(radius)
    leaf = shapes.petal_path(radius * 1.2, radius * 0.5)
    colors = ("#f9a8d4", "#fda4af", "#c4b5fd", "#fcd34d")
    corners = _corners(x0, y0, w, h, pad * 1.2)
    for index, (x, y) in enumerate(corners):
        base = math.atan2(y0 + h / 2 - y, x0 + w / 2 - x) + math.pi / 2
        for side in (-0.7, 0.7):
            _glyph(surface, leaf, x, y, base + side, "#4ade80")
        _glyph(surface, petals, x, y, index * 0.4, colors[index % len(colors)])
        _glyph(surface, center, x, y, 0, "#fde047")


@register(Frame.HEARTS)
def _draw_hearts(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.025, 8)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.6)),
        "#f472b6",
        max(4, math.floor(pad * 0.5)),
    )
    for x, y in edge_scatter(rng, x0, y0, w, h, pad * 1.5, 40):
        size = rng.random() * 4 + 4
        color = _PINKS[int(rng.random() * len(_PINKS))]
        _glyph(surface, shapes.heart_path(size), x, y, (rng.random() - 0.5), color)


@register(Frame.SPARKLE)
def _draw_sparkle(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.025, 8)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.6)),
        linear_gradient(
            x0, y0, x0 + w, y0 + h, ((0, "#fbcfe8"), (0.5, "#fef3c7"), (1, "#e9d5ff"))
        ),
        max(4, math.floor(pad * 0.5)),
    )
    colors = ("#fde68a", "#ffffff", "#f9a8d4")
    for x, y in edge_scatter(rng, x0, y0, w, h, pad * 1.5, 36):
        if rng.random() < 0.5:
            size = rng.random() * 4 + 3
            color = colors[int(rng.random() * len(colors))]
            _glyph(surface, shapes.diamond_sparkle_path(size), x, y, 0, color)
        else:
            _dot(surface, x, y, rng.random() * 1.5 + 0.8, "rgba(255,255,255,0.9)")


@register(Frame.RIBBON)
def _draw_ribbon(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.025, 8)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.6)),
        "#f472b6",
        max(5, math.floor(pad * 0.6)),
    )
    surface.stroke(
        _inset(x0, y0, w, h, pad * 1.6, math.floor(pad * 0.4)),
        "#fbcfe8",
        max(2, math.floor(pad * 0.25)),
    )
    size = _pad(w, h, 0.06, 10)
    loops, knot = shapes.bow_paths(size)
    corners = _corners(x0, y0, w, h, pad * 1.2)
    for (x, y), angle in ((corners[0], -0.35), (corners[3], 0.35)):
        _glyph(surface, loops, x, y, angle, "#ec4899", "#be185d", 1)
        _glyph(surface, knot, x, y, angle, "#be185d")


@register(Frame.CANDY)
def _draw_candy(surface, x0, y0, w, h, rng):
    band = _pad(w, h, 0.04, 10)
    stripe = max(4, band // 2)
    with surface.saved():
        area = _band(x0, y0, w, h, band)
        surface.clip(area)
        surface.fill(area, "#ffffff")
        stripes = Path()
        offset = -h
        while offset < w:
            stripes.polygon(
                (
                    (x0 + offset, y0),
                    (x0 + offset + stripe, y0),
                    (x0 + offset + stripe + h, y0 + h),
                    (x0 + offset + h, y0 + h),
                )
            )
            offset += stripe * 2
        surface.fill(stripes, "#f9a8d4")
    surface.stroke(Path().rect(x0 + 1, y0 + 1, w - 2, h - 2), "#ec4899", 2)
    surface.stroke(
        Path().rect(x0 + band, y0 + band, w - band * 2, h - band * 2), "#ec4899", 2
    )


@register(Frame.BLOSSOM)
def _draw_blossom(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.025, 8)
    surface.stroke(
        _inset(x0, y0, w, h, pad, math.floor(pad * 0.6)),
        "#fbcfe8",
        max(3, math.floor(pad * 0.4)),
    )
    colors = (
        "rgba(251,207,232,0.9)",
        "rgba(249,168,212,0.9)",
        "rgba(253,164,175,0.9)",
        "rgba(252,231,243,0.9)",
    )
    for x, y in edge_scatter(rng, x0, y0, w, h, pad * 2, 50):
        length = rng.random() * 6 + 6
        angle = rng.random() * 2 * math.pi
        color = colors[int(rng.random() * len(colors))]
        _glyph(surface, shapes.petal_path(length, length * 0.55), x, y, angle, color)


@register(Frame.KAWAII)
def _draw_kawaii(surface, x0, y0, w, h, rng):
    pad = _pad(w, h, 0.035, 10)
    surface.stroke(
        _inset(x0, y0, w, h, pad, pad), "#f472b6", max(10, math.floor(pad * 1.0))
    )
    surface.stroke(
        _inset(x0, y0, w, h, pad * 1.7, math.floor(pad * 0.6)),
        "rgba(255,255,255,0.95)",
        max(2, math.floor(pad * 0.2)),
    )
    size = _pad(w, h, 0.05, 8)
    tl, tr, bl, br = _corners(x0, y0, w, h, pad * 1.2)
    stickers = (
        (tl, shapes.heart_path(size), "#ec4899", -0.3),
        (tr, shapes.star_path(size), "#facc15", 0.2),
        (bl, shapes.diamond_sparkle_path(size), "#ffffff", 0.0),
        (br, shapes.heart_path(size), "#fb7185", 0.3),
    )
    for (x, y), path, color, angle in stickers:
        _glyph(surface, path, x, y, angle, color, "#ffffff", 2)
