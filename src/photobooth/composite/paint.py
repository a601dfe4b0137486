"""
Paint sources: CSS colors and gradients.

Every paint implements ``draw(viewport, matrix)`` returning ``(color, alpha)``
planes for the device-space ``viewport``. Planes may be broadcastable
``(1, 1, n)`` arrays when the paint is uniform.
"""

import functools
import logging
import re
from typing import Sequence, Tuple, Union

import numpy as np
from attrs import define, field
from PIL import ImageColor
from scipy import interpolate

from photobooth.composite import transform

logger = logging.getLogger(__name__)

RGBA = Tuple[float, float, float, float]

_RGB_FUNC = re.compile(
    r"^rgba?\(\s*([-+\d.]+%?)\s*[,\s]\s*([-+\d.]+%?)\s*[,\s]\s*([-+\d.]+%?)"
    r"(?:\s*[,/]\s*([-+\d.]+%?))?\s*\)$",
    re.IGNORECASE,
)


def _channel(token: str, scale: float) -> float:
    if token.endswith("%"):
        return float(token[:-1]) / 100.0
    return float(token) / scale


@functools.lru_cache(maxsize=256)
def parse_color(value: str) -> RGBA:
    """
    Parse a CSS color string into an RGBA tuple of floats in [0, 1].

    Supports ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``, ``rgb()``,
    ``rgba()`` with a fractional alpha, ``hsl()`` and named colors.
    Unparseable values resolve to opaque black.

    Example::

        >>> parse_color("rgba(0,0,0,0.5)")
        (0.0, 0.0, 0.0, 0.5)
    """
    text = str(value).strip()
    if text.lower() == "transparent":
        return (0.0, 0.0, 0.0, 0.0)
    match = _RGB_FUNC.match(text)
    try:
        if match:
            r, g, b = (_channel(token, 255.0) for token in match.groups()[:3])
            a = _channel(match.group(4), 1.0) if match.group(4) else 1.0
            rgba = (r, g, b, a)
        else:
            values = ImageColor.getrgb(text)
            rgba = tuple(v / 255.0 for v in values[:3]) + (
                (values[3] / 255.0) if len(values) > 3 else 1.0,
            )
    except ValueError:
        logger.warning("Unknown color %r, using black", value)
        return (0.0, 0.0, 0.0, 1.0)
    return tuple(min(1.0, max(0.0, float(v))) for v in rgba)


@define(frozen=True)
class SolidColor:
    """Uniform paint."""

    rgba: RGBA

    @classmethod
    def parse(cls, value: str) -> "SolidColor":
        return cls(parse_color(value))

    def draw(self, viewport, matrix=transform.IDENTITY):
        color = np.array(self.rgba[:3], dtype=np.float32).reshape((1, 1, 3))
        alpha = np.full((1, 1, 1), self.rgba[3], dtype=np.float32)
        return color, alpha


def _convert_stops(stops):
    return tuple((float(offset), str(color)) for offset, color in stops)


@define(frozen=True)
class _Gradient:
    stops: Tuple[Tuple[float, str], ...] = field(converter=_convert_stops)

    def _interpolators(self):
        X, Y = [], []
        for offset, color in sorted(self.stops, key=lambda stop: stop[0]):
            location = min(1.0, max(0.0, offset))
            rgba = np.array(parse_color(color), dtype=np.float32)
            if len(X) and X[-1] == location:
                logger.debug("Duplicate stop at %g", location)
                X.pop(), Y.pop()
            X.append(location), Y.append(rgba)
        if len(X) == 0:
            X, Y = [0.0, 1.0], [np.zeros(4, dtype=np.float32)] * 2
        elif len(X) == 1:
            X = [0.0, 1.0]
            Y = [Y[0], Y[0]]
        Y = np.stack(Y)
        return interpolate.interp1d(
            X, Y, axis=0, bounds_error=False, fill_value=(Y[0], Y[-1])
        )

    def _user_grid(self, viewport, matrix):
        """Pixel centers of ``viewport`` mapped back into user space."""
        inverse = transform.invert(matrix)
        X, Y = np.meshgrid(
            np.arange(viewport[0], viewport[2], dtype=np.float32) + 0.5,
            np.arange(viewport[1], viewport[3], dtype=np.float32) + 0.5,
        )
        a, b, c, d, e, f = inverse
        return a * X + c * Y + e, b * X + d * Y + f

    def _index(self, U, V):
        raise NotImplementedError

    def draw(self, viewport, matrix=transform.IDENTITY):
        U, V = self._user_grid(viewport, matrix)
        Z = np.clip(self._index(U, V), 0.0, 1.0)
        rgba = self._interpolators()(Z).astype(np.float32)
        return rgba[:, :, :3], rgba[:, :, 3:]


@define(frozen=True)
class LinearGradient(_Gradient):
    """Linear gradient between two user-space points."""

    x0: float = 0.0
    y0: float = 0.0
    x1: float = 0.0
    y1: float = 0.0

    def _index(self, U, V):
        dx, dy = self.x1 - self.x0, self.y1 - self.y0
        length = dx * dx + dy * dy
        if length == 0:
            return np.zeros_like(U)
        return ((U - self.x0) * dx + (V - self.y0) * dy) / length


@define(frozen=True)
class RadialGradient(_Gradient):
    """Concentric radial gradient between radii ``r0`` and ``r1``."""

    cx: float = 0.0
    cy: float = 0.0
    r0: float = 0.0
    r1: float = 1.0

    def _index(self, U, V):
        distance = np.sqrt(np.power(U - self.cx, 2) + np.power(V - self.cy, 2))
        span = self.r1 - self.r0
        if span == 0:
            return (distance >= self.r1).astype(np.float32)
        return (distance - self.r0) / span


def linear_gradient(x0, y0, x1, y1, stops: Sequence) -> LinearGradient:
    return LinearGradient(stops, x0, y0, x1, y1)


def radial_gradient(cx, cy, r0, r1, stops: Sequence) -> RadialGradient:
    return RadialGradient(stops, cx, cy, r0, r1)


Paint = Union[str, SolidColor, LinearGradient, RadialGradient]


def to_paint(value: Paint):
    """Coerce a CSS color string into a paint; paints pass through."""
    if isinstance(value, (SolidColor, _Gradient)):
        return value
    return SolidColor.parse(value)
