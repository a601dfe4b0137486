"""
Affine transforms in canvas form.

A matrix is the 6-tuple ``(a, b, c, d, e, f)`` mapping a user-space point
``(x, y)`` to ``(a * x + c * y + e, b * x + d * y + f)``.
"""

import math
from typing import Iterable, Tuple

Matrix = Tuple[float, float, float, float, float, float]

IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def multiply(m: Matrix, n: Matrix) -> Matrix:
    """Return ``m * n``, i.e. ``n`` applied first, then ``m``."""
    a1, b1, c1, d1, e1, f1 = m
    a2, b2, c2, d2, e2, f2 = n
    return (
        a1 * a2 + c1 * b2,
        b1 * a2 + d1 * b2,
        a1 * c2 + c1 * d2,
        b1 * c2 + d1 * d2,
        a1 * e2 + c1 * f2 + e1,
        b1 * e2 + d1 * f2 + f1,
    )


def translation(tx: float, ty: float) -> Matrix:
    return (1.0, 0.0, 0.0, 1.0, float(tx), float(ty))


def rotation(angle: float) -> Matrix:
    """Clockwise rotation in radians (y axis points down)."""
    cos, sin = math.cos(angle), math.sin(angle)
    return (cos, sin, -sin, cos, 0.0, 0.0)


def scaling(sx: float, sy: float) -> Matrix:
    return (float(sx), 0.0, 0.0, float(sy), 0.0, 0.0)


def apply(m: Matrix, x: float, y: float) -> Tuple[float, float]:
    a, b, c, d, e, f = m
    return (a * x + c * y + e, b * x + d * y + f)


def apply_all(m: Matrix, points: Iterable[Tuple[float, float]]):
    return [apply(m, x, y) for x, y in points]


def determinant(m: Matrix) -> float:
    return m[0] * m[3] - m[1] * m[2]


def invert(m: Matrix) -> Matrix:
    a, b, c, d, e, f = m
    det = determinant(m)
    if det == 0:
        raise ValueError("Singular matrix: %r" % (m,))
    return (
        d / det,
        -b / det,
        -c / det,
        a / det,
        (c * f - d * e) / det,
        (b * e - a * f) / det,
    )


def scale_factor(m: Matrix) -> float:
    """Mean linear scale of the transform, used for line widths and blur radii."""
    return math.sqrt(abs(determinant(m)))


def is_translation(m: Matrix) -> bool:
    return m[0] == 1.0 and m[1] == 0.0 and m[2] == 0.0 and m[3] == 1.0
