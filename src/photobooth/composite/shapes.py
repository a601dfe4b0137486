"""
Vector glyphs shared by overlays, frames and templates.

All glyphs are centered at the origin so callers position them with a
translate/rotate on the surface.
"""

import math
from typing import Optional

from photobooth.composite import transform
from photobooth.composite.path import Path

# Heart silhouette on a 100 x 100 box; scaled about (50, 50).
_HEART = (
    ("M", (50, 80)),
    ("C", (20, 60), (5, 45), (20, 25)),
    ("C", (35, 10), (50, 25), (50, 25)),
    ("C", (50, 25), (65, 10), (80, 25)),
    ("C", (95, 45), (80, 60), (50, 80)),
)


def heart_path(size: float) -> Path:
    """Heart about ``2 * size`` wide."""
    s = size / 45.0
    path = Path()
    for command in _HEART:
        points = [((x - 50) * s, (y - 50) * s) for x, y in command[1:]]
        if command[0] == "M":
            path.move_to(*points[0])
        else:
            path.curve_to(*(v for point in points for v in point))
    return path.close()


def star_path(outer: float, inner: Optional[float] = None, points: int = 5) -> Path:
    """Star polygon alternating ``outer`` and ``inner`` radii, tip up."""
    inner = outer * 0.5 if inner is None else inner
    vertices = []
    for i in range(points * 2):
        radius = outer if i % 2 == 0 else inner
        angle = -math.pi / 2 + i * math.pi / points
        vertices.append((radius * math.cos(angle), radius * math.sin(angle)))
    return Path().polygon(vertices)


def sparkle_path(size: float, arms: int = 4) -> Path:
    """Open strokes radiating ``size`` from the center."""
    path = Path()
    for i in range(arms):
        angle = -math.pi / 2 + i * 2 * math.pi / arms
        path.line(0, 0, size * math.cos(angle), size * math.sin(angle))
    return path


def diamond_sparkle_path(size: float) -> Path:
    """Four-pointed filled twinkle."""
    waist = size * 0.25
    path = Path().move_to(0, -size)
    path.quad_to(waist, -waist, size, 0)
    path.quad_to(waist, waist, 0, size)
    path.quad_to(-waist, waist, -size, 0)
    path.quad_to(-waist, -waist, 0, -size)
    return path.close()


def petal_path(length: float, width: float) -> Path:
    """Petal pointing up from the origin."""
    return Path().ellipse(0, -length / 2.0, width / 2.0, length / 2.0)


def flower_paths(radius: float, petals: int = 5):
    """Return (petals, center) paths of a simple flower."""
    path = Path()
    for i in range(petals):
        matrix = transform.rotation(i * 2 * math.pi / petals)
        path.extend(petal_path(radius, radius * 0.6).transform(matrix))
    return path, Path().circle(0, 0, radius * 0.3)


def bow_paths(size: float):
    """Return (loops, knot) paths of a ribbon bow about ``2 * size`` wide."""
    loops = Path()
    for side in (-1, 1):
        loops.move_to(0, 0)
        loops.curve_to(
            side * size * 0.6, -size * 0.8, side * size, -size * 0.5, side * size, 0
        )
        loops.curve_to(side * size, size * 0.5, side * size * 0.6, size * 0.8, 0, 0)
        loops.close()
        loops.move_to(0, 0)
        loops.line_to(side * size * 0.35, size * 0.95)
        loops.line_to(side * size * 0.6, size * 0.85)
        loops.close()
    return loops, Path().circle(0, 0, size * 0.2)


def starburst_path(outer: float, inner: float, points: int = 12) -> Path:
    """Comic style starburst."""
    return star_path(outer, inner, points)


def wave_path(x0: float, y: float, width: float, amplitude: float, period: float):
    """Horizontal sine-like wave made of cubic segments."""
    path = Path().move_to(x0, y)
    half = max(1.0, period / 2.0)
    x = x0
    sign = -1
    while x < x0 + width:
        path.curve_to(
            x + half / 3.0,
            y + sign * amplitude,
            x + 2 * half / 3.0,
            y + sign * amplitude,
            x + half,
            y,
        )
        x += half
        sign = -sign
    return path
