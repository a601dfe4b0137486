"""
Vector path construction.

A :py:class:`Path` collects subpaths of straight and cubic Bézier segments in
user space. Arcs and ellipses are approximated by cubic curves so every path
can be fed to aggdraw as an SVG-like symbol string.
"""

import logging
import math
from typing import Iterator, List, Sequence, Tuple

from photobooth.composite import transform
from photobooth.composite.transform import Matrix

logger = logging.getLogger(__name__)

#: Control point distance of a cubic quarter-circle approximation.
KAPPA = 0.5522847498

Point = Tuple[float, float]


class Path(object):
    """
    Mutable path made of subpaths.

    Each subpath is a list of commands: ``("M", p)``, ``("L", p)``,
    ``("C", c1, c2, p)`` and ``("Z",)``.
    """

    def __init__(self):
        self._subpaths: List[list] = []

    def __len__(self) -> int:
        return len(self._subpaths)

    def __iter__(self):
        return iter(self._subpaths)

    def __repr__(self) -> str:
        return "%s(subpaths=%d)" % (self.__class__.__name__, len(self._subpaths))

    @property
    def current(self):
        if not self._subpaths:
            return None
        for command in reversed(self._subpaths[-1]):
            if command[0] != "Z":
                return command[-1]
        return None

    def move_to(self, x: float, y: float) -> "Path":
        self._subpaths.append([("M", (float(x), float(y)))])
        return self

    def line_to(self, x: float, y: float) -> "Path":
        if not self._subpaths:
            return self.move_to(x, y)
        self._subpaths[-1].append(("L", (float(x), float(y))))
        return self

    def curve_to(self, x1, y1, x2, y2, x, y) -> "Path":
        if not self._subpaths:
            self.move_to(x1, y1)
        self._subpaths[-1].append(
            ("C", (float(x1), float(y1)), (float(x2), float(y2)), (float(x), float(y)))
        )
        return self

    def quad_to(self, cx, cy, x, y) -> "Path":
        """Quadratic curve, elevated to a cubic one."""
        start = self.current
        if start is None:
            return self.move_to(x, y)
        x0, y0 = start
        return self.curve_to(
            x0 + 2.0 / 3.0 * (cx - x0),
            y0 + 2.0 / 3.0 * (cy - y0),
            x + 2.0 / 3.0 * (cx - x),
            y + 2.0 / 3.0 * (cy - y),
            x,
            y,
        )

    def close(self) -> "Path":
        if self._subpaths:
            self._subpaths[-1].append(("Z",))
        return self

    def rect(self, x: float, y: float, w: float, h: float) -> "Path":
        self.move_to(x, y)
        self.line_to(x + w, y)
        self.line_to(x + w, y + h)
        self.line_to(x, y + h)
        return self.close()

    def rounded_rect(self, x: float, y: float, w: float, h: float, r: float) -> "Path":
        """
        Rounded rectangle. Negative extents are normalized and the radius is
        clamped to half of the shorter side.
        """
        if w < 0:
            x, w = x + w, -w
        if h < 0:
            y, h = y + h, -h
        r = max(0.0, min(float(r), w / 2.0, h / 2.0))
        if r == 0:
            return self.rect(x, y, w, h)
        k = r * (1 - KAPPA)
        self.move_to(x + r, y)
        self.line_to(x + w - r, y)
        self.curve_to(x + w - k, y, x + w, y + k, x + w, y + r)
        self.line_to(x + w, y + h - r)
        self.curve_to(x + w, y + h - k, x + w - k, y + h, x + w - r, y + h)
        self.line_to(x + r, y + h)
        self.curve_to(x + k, y + h, x, y + h - k, x, y + h - r)
        self.line_to(x, y + r)
        self.curve_to(x, y + k, x + k, y, x + r, y)
        return self.close()

    def ellipse(self, cx: float, cy: float, rx: float, ry: float) -> "Path":
        rx, ry = abs(rx), abs(ry)
        ox, oy = rx * KAPPA, ry * KAPPA
        self.move_to(cx + rx, cy)
        self.curve_to(cx + rx, cy + oy, cx + ox, cy + ry, cx, cy + ry)
        self.curve_to(cx - ox, cy + ry, cx - rx, cy + oy, cx - rx, cy)
        self.curve_to(cx - rx, cy - oy, cx - ox, cy - ry, cx, cy - ry)
        self.curve_to(cx + ox, cy - ry, cx + rx, cy - oy, cx + rx, cy)
        return self.close()

    def circle(self, cx: float, cy: float, r: float) -> "Path":
        return self.ellipse(cx, cy, r, r)

    def polygon(self, points: Sequence[Point], closed: bool = True) -> "Path":
        points = list(points)
        if not points:
            return self
        self.move_to(*points[0])
        for point in points[1:]:
            self.line_to(*point)
        if closed:
            self.close()
        return self

    def line(self, x0: float, y0: float, x1: float, y1: float) -> "Path":
        return self.move_to(x0, y0).line_to(x1, y1)

    def extend(self, other: "Path") -> "Path":
        self._subpaths.extend(list(subpath) for subpath in other)
        return self

    def transform(self, matrix: Matrix) -> "Path":
        """Return a new path with every point mapped through ``matrix``."""
        result = Path()
        for subpath in self._subpaths:
            commands = []
            for command in subpath:
                commands.append(
                    (command[0],)
                    + tuple(transform.apply(matrix, *p) for p in command[1:])
                )
            result._subpaths.append(commands)
        return result

    def points(self) -> Iterator[Point]:
        for subpath in self._subpaths:
            for command in subpath:
                for point in command[1:]:
                    yield point

    def bounds(self) -> Tuple[float, float, float, float]:
        """Bounding box of points and control points as (left, top, right, bottom)."""
        xs, ys = [], []
        for x, y in self.points():
            xs.append(x)
            ys.append(y)
        if not xs:
            return (0.0, 0.0, 0.0, 0.0)
        return (min(xs), min(ys), max(xs), max(ys))

    def symbol(self, offset: Point = (0.0, 0.0)) -> str:
        """SVG path string with every point shifted by ``-offset``."""
        return " ".join(_generate_symbol(self._subpaths, offset))


def _generate_symbol(subpaths, offset) -> Iterator[str]:
    """Sequence generator for SVG path."""
    dx, dy = offset
    for subpath in subpaths:
        if len(subpath) <= 1:
            logger.debug("not enough segments: %d", len(subpath))
            continue
        for command in subpath:
            yield command[0]
            for x, y in command[1:]:
                if not (math.isfinite(x) and math.isfinite(y)):
                    x, y = 0.0, 0.0
                yield "%.2f" % (x - dx)
                yield "%.2f" % (y - dy)
