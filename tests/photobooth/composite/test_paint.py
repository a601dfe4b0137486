import logging

import numpy as np
import pytest

from photobooth.composite.paint import (
    LinearGradient,
    RadialGradient,
    SolidColor,
    linear_gradient,
    parse_color,
    radial_gradient,
    to_paint,
)

logger = logging.getLogger(__name__)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#ff0000", (1.0, 0.0, 0.0, 1.0)),
        ("#fff", (1.0, 1.0, 1.0, 1.0)),
        ("white", (1.0, 1.0, 1.0, 1.0)),
        ("rgba(0,0,0,0.5)", (0.0, 0.0, 0.0, 0.5)),
        ("rgba(255, 255, 255, 0.95)", (1.0, 1.0, 1.0, 0.95)),
        ("rgb(255, 0, 0)", (1.0, 0.0, 0.0, 1.0)),
        ("rgb(100%, 0%, 50%)", (1.0, 0.0, 0.5, 1.0)),
        ("transparent", (0.0, 0.0, 0.0, 0.0)),
        ("not-a-color", (0.0, 0.0, 0.0, 1.0)),
    ],
)
def test_parse_color(value, expected):
    assert parse_color(value) == pytest.approx(expected)


def test_parse_color_clamps():
    assert parse_color("rgba(300,-5,0,2)") == pytest.approx((1.0, 0.0, 0.0, 1.0))


def test_solid_color():
    color, alpha = SolidColor.parse("rgba(255,0,0,0.25)").draw((0, 0, 4, 4))
    assert color.shape == (1, 1, 3)
    assert alpha.shape == (1, 1, 1)
    assert color[0, 0].tolist() == [1.0, 0.0, 0.0]
    assert alpha[0, 0, 0] == pytest.approx(0.25)


def test_linear_gradient():
    paint = linear_gradient(0, 0, 10, 0, ((0, "#000000"), (1, "#ffffff")))
    color, alpha = paint.draw((0, 0, 10, 2))
    assert color.shape == (2, 10, 3)
    assert alpha.shape == (2, 10, 1)
    assert np.all(alpha == 1.0)
    row = color[0, :, 0]
    assert row[0] == pytest.approx(0.05, abs=1e-4)
    assert row[-1] == pytest.approx(0.95, abs=1e-4)
    assert np.all(np.diff(row) > 0)
    assert np.array_equal(color[0], color[1])


def test_linear_gradient_extends_end_colors():
    paint = LinearGradient(((0.25, "#ff0000"), (0.75, "#0000ff")), 0, 0, 100, 0)
    color, _ = paint.draw((0, 0, 100, 1))
    assert color[0, 0].tolist() == pytest.approx([1.0, 0.0, 0.0])
    assert color[0, -1].tolist() == pytest.approx([0.0, 0.0, 1.0])


def test_linear_gradient_degenerate():
    paint = LinearGradient(((0, "#ff0000"), (1, "#0000ff")), 5, 5, 5, 5)
    color, _ = paint.draw((0, 0, 4, 4))
    assert np.allclose(color[..., 0], 1.0)


def test_gradient_single_stop():
    paint = LinearGradient(((0.5, "#00ff00"),), 0, 0, 10, 0)
    color, alpha = paint.draw((0, 0, 10, 1))
    assert np.allclose(color[..., 1], 1.0)
    assert np.allclose(alpha, 1.0)


def test_radial_gradient():
    paint = radial_gradient(5, 5, 0, 5, ((0, "#000000"), (1, "#ffffff")))
    color, _ = paint.draw((0, 0, 10, 10))
    center = color[4, 4, 0]
    corner = color[0, 0, 0]
    assert center < 0.2
    assert corner == pytest.approx(1.0)
    assert isinstance(paint, RadialGradient)


def test_gradient_follows_transform():
    paint = linear_gradient(0, 0, 10, 0, ((0, "#000000"), (1, "#ffffff")))
    matrix = (1.0, 0.0, 0.0, 1.0, 10.0, 0.0)
    color, _ = paint.draw((10, 0, 20, 1), matrix)
    assert color[0, 0, 0] == pytest.approx(0.05, abs=1e-4)


def test_to_paint():
    assert isinstance(to_paint("#123456"), SolidColor)
    gradient = linear_gradient(0, 0, 1, 1, ((0, "red"), (1, "blue")))
    assert to_paint(gradient) is gradient
