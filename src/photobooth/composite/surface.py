"""
Raster drawing surface.

:py:class:`Surface` is an immediate-mode 2D canvas backed by float32 color
``(H, W, 3)`` and alpha ``(H, W, 1)`` planes. Drawing state (transform, clip,
global alpha and shadow) lives on a save/restore stack; use
:py:meth:`Surface.saved` to scope changes::

    surface = Surface(200, 100)
    with surface.saved():
        surface.translate(100, 50)
        surface.rotate(math.radians(30))
        surface.fill(Path().circle(0, 0, 10), "#ff0000")
"""

import contextlib
import logging
import math
from typing import Iterator, Optional, Tuple

import numpy as np
from attrs import define, evolve
from PIL import Image
from skimage import filters

from photobooth.composite import transform, vector
from photobooth.composite.transform import Matrix
from photobooth.composite.blend import source_over
from photobooth.composite.paint import RGBA, parse_color, to_paint
from photobooth.composite.path import Path
from photobooth.composite.text import Font, render_mask
from photobooth.composite.utils import Viewport, crop, divide, expand, intersect
from photobooth.constants import MAX_CANVAS_AREA, TextAlign, TextBaseline
from photobooth.exceptions import SurfaceError

logger = logging.getLogger(__name__)


@define
class _State:
    matrix: Matrix = transform.IDENTITY
    clip: Optional[np.ndarray] = None
    alpha: float = 1.0
    shadow_color: RGBA = (0.0, 0.0, 0.0, 0.0)
    shadow_blur: float = 0.0


class Surface(object):
    """
    Drawing surface of a fixed pixel size.

    :param width: width in pixels.
    :param height: height in pixels.
    :raise SurfaceError: when the size is not positive or too large.
    """

    def __init__(self, width: int, height: int):
        try:
            width, height = int(width), int(height)
        except (TypeError, ValueError) as e:
            raise SurfaceError("Invalid surface size: %r x %r" % (width, height)) from e
        if width <= 0 or height <= 0:
            raise SurfaceError("Invalid surface size: %d x %d" % (width, height))
        if width * height > MAX_CANVAS_AREA:
            raise SurfaceError(
                "Surface too large: %d x %d exceeds %d pixels"
                % (width, height, MAX_CANVAS_AREA)
            )
        try:
            self._color = np.zeros((height, width, 3), dtype=np.float32)
            self._alpha = np.zeros((height, width, 1), dtype=np.float32)
        except MemoryError as e:
            raise SurfaceError(
                "Cannot allocate %d x %d surface" % (width, height)
            ) from e
        self._width = width
        self._height = height
        self._state = _State()
        self._stack = []

    def __repr__(self) -> str:
        return "%s(width=%d, height=%d)" % (
            self.__class__.__name__,
            self._width,
            self._height,
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    @property
    def viewport(self) -> Viewport:
        return (0, 0, self._width, self._height)

    @property
    def color(self) -> np.ndarray:
        return self._color

    @property
    def alpha(self) -> np.ndarray:
        return self._alpha

    # Drawing state.

    def save(self) -> None:
        self._stack.append(evolve(self._state))

    def restore(self) -> None:
        if not self._stack:
            logger.debug("restore() without matching save()")
            return
        self._state = self._stack.pop()

    @contextlib.contextmanager
    def saved(self) -> Iterator["Surface"]:
        """Scope every state change made inside the block."""
        self.save()
        try:
            yield self
        finally:
            self.restore()

    @property
    def matrix(self) -> Matrix:
        return self._state.matrix

    def set_transform(self, matrix: Matrix) -> None:
        self._state.matrix = tuple(float(v) for v in matrix)

    def transform(self, matrix: Matrix) -> None:
        self._state.matrix = transform.multiply(self._state.matrix, matrix)

    def translate(self, tx: float, ty: float) -> None:
        self.transform(transform.translation(tx, ty))

    def rotate(self, angle: float) -> None:
        """Rotate clockwise by ``angle`` radians."""
        self.transform(transform.rotation(angle))

    def scale(self, sx: float, sy: Optional[float] = None) -> None:
        self.transform(transform.scaling(sx, sx if sy is None else sy))

    @property
    def global_alpha(self) -> float:
        return self._state.alpha

    @global_alpha.setter
    def global_alpha(self, value: float) -> None:
        value = float(value)
        if math.isfinite(value):
            self._state.alpha = min(1.0, max(0.0, value))

    def set_shadow(self, color="rgba(0,0,0,0)", blur: float = 0.0) -> None:
        self._state.shadow_color = parse_color(color)
        self._state.shadow_blur = max(0.0, float(blur))

    def clip(self, path: Path) -> None:
        """Intersect the clip region with the interior of ``path``."""
        mask = vector.draw_fill_mask(path.transform(self.matrix), self.viewport)
        if self._state.clip is not None:
            mask = self._state.clip * mask
        self._state.clip = mask

    # Drawing operations.

    def fill(self, path: Path, paint) -> None:
        device = path.transform(self.matrix)
        viewport = self._viewport_for(device.bounds(), 1)
        if viewport is None:
            return
        self._apply(viewport, vector.draw_fill_mask(device, viewport), paint)

    def stroke(self, path: Path, paint, width: float = 1.0) -> None:
        if width <= 0:
            return
        device = path.transform(self.matrix)
        pen = width * transform.scale_factor(self.matrix)
        viewport = self._viewport_for(device.bounds(), pen / 2.0 + 2)
        if viewport is None:
            return
        self._apply(viewport, vector.draw_stroke_mask(device, viewport, pen), paint)

    def fill_rect(self, x: float, y: float, w: float, h: float, paint) -> None:
        self.fill(Path().rect(x, y, w, h), paint)

    def stroke_rect(self, x, y, w, h, paint, width: float = 1.0) -> None:
        self.stroke(Path().rect(x, y, w, h), paint, width)

    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        paint,
        font: Font = Font(),
        align=TextAlign.LEFT,
        baseline=TextBaseline.ALPHABETIC,
    ) -> None:
        self._draw_text(text, x, y, paint, font, align, baseline, 0)

    def stroke_text(
        self,
        text: str,
        x: float,
        y: float,
        paint,
        font: Font = Font(),
        width: float = 1.0,
        align=TextAlign.LEFT,
        baseline=TextBaseline.ALPHABETIC,
    ) -> None:
        if width <= 0:
            return
        stroke_width = max(1, int(round(width / 2.0)))
        self._draw_text(text, x, y, paint, font, align, baseline, stroke_width)

    def _draw_text(self, text, x, y, paint, font, align, baseline, stroke_width):
        if not text:
            return
        mask, (left, top) = render_mask(text, font, align, baseline, stroke_width)
        matrix = transform.multiply(
            self.matrix, transform.translation(x + left, y + top)
        )
        warped = self._warp(mask, matrix)
        if warped is None:
            return
        viewport, coverage = warped
        self._apply(viewport, coverage, paint)

    def draw_image(
        self,
        image: Image.Image,
        x: float = 0,
        y: float = 0,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> None:
        """Draw ``image`` scaled to ``width`` x ``height`` at ``(x, y)``."""
        if image.width == 0 or image.height == 0:
            return
        width = image.width if width is None else width
        height = image.height if height is None else height
        if width == 0 or height == 0:
            return
        matrix = transform.multiply(
            self.matrix,
            transform.multiply(
                transform.translation(x, y),
                transform.scaling(width / image.width, height / image.height),
            ),
        )
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        warped = self._warp(image.convert("RGBa"), matrix)
        if warped is None:
            return
        viewport, pixels = warped
        alpha = pixels[:, :, 3:]
        color = divide(pixels[:, :, :3], alpha)
        self._apply(viewport, np.ones_like(alpha), (color, alpha))

    # Pixel access.

    def get_pixels(self) -> np.ndarray:
        """Read back a ``uint8`` RGBA array of shape (height, width, 4)."""
        rgba = np.concatenate((self._color, self._alpha), axis=2) * 255.0
        return np.clip(np.rint(rgba), 0, 255).astype(np.uint8)

    def put_pixels(self, pixels: np.ndarray) -> None:
        """Replace the surface content with a ``uint8`` RGBA array."""
        pixels = np.asarray(pixels).reshape((self._height, self._width, 4))
        self._color = pixels[:, :, :3].astype(np.float32) / 255.0
        self._alpha = pixels[:, :, 3:].astype(np.float32) / 255.0

    def topil(self) -> Image.Image:
        return Image.fromarray(self.get_pixels())

    @classmethod
    def frompil(cls, image: Image.Image) -> "Surface":
        surface = cls(image.width, image.height)
        surface.draw_image(image, 0, 0)
        return surface

    # Internals.

    def _shadow_margin(self) -> float:
        state = self._state
        if state.shadow_blur <= 0 or state.shadow_color[3] <= 0:
            return 0.0
        return math.ceil(1.5 * state.shadow_blur)

    def _viewport_for(self, bounds, margin) -> Optional[Viewport]:
        outer = expand(bounds, margin + self._shadow_margin())
        viewport = intersect(outer, self.viewport)
        if viewport == (0, 0, 0, 0):
            return None
        return viewport

    def _warp(self, image: Image.Image, matrix: Matrix):
        """
        Map ``image`` through ``matrix`` onto the surface grid.

        :return: tuple of the covered viewport and a float32 array of the
            warped pixels in [0, 1], or None when nothing is visible.
        """
        e, f = matrix[4], matrix[5]
        if transform.is_translation(matrix) and e.is_integer() and f.is_integer():
            e, f = int(e), int(f)
            viewport = intersect(
                (e, f, e + image.width, f + image.height), self.viewport
            )
            if viewport == (0, 0, 0, 0):
                return None
            region = image.crop(
                (viewport[0] - e, viewport[1] - f, viewport[2] - e, viewport[3] - f)
            )
            return self._with_shadow_margin(viewport, _to_array(region))

        corners = transform.apply_all(
            matrix,
            ((0, 0), (image.width, 0), (image.width, image.height), (0, image.height)),
        )
        xs, ys = [p[0] for p in corners], [p[1] for p in corners]
        viewport = self._viewport_for((min(xs), min(ys), max(xs), max(ys)), 1)
        if viewport is None:
            return None

        sx = math.hypot(matrix[0], matrix[1])
        sy = math.hypot(matrix[2], matrix[3])
        if sx < 1.0 or sy < 1.0:
            size = (
                max(1, int(round(image.width * min(1.0, sx)))),
                max(1, int(round(image.height * min(1.0, sy)))),
            )
            matrix = transform.multiply(
                matrix,
                transform.scaling(image.width / size[0], image.height / size[1]),
            )
            image = image.resize(size, Image.Resampling.LANCZOS)

        local = transform.multiply(
            transform.translation(-viewport[0], -viewport[1]), matrix
        )
        a, b, c, d, e, f = transform.invert(local)
        warped = image.transform(
            (viewport[2] - viewport[0], viewport[3] - viewport[1]),
            Image.Transform.AFFINE,
            (a, c, e, b, d, f),
            resample=Image.Resampling.BICUBIC,
        )
        return viewport, _to_array(warped)

    def _with_shadow_margin(self, viewport, pixels):
        margin = int(self._shadow_margin())
        if margin == 0:
            return viewport, pixels
        outer = intersect(expand(viewport, margin), self.viewport)
        padded = np.zeros(
            (outer[3] - outer[1], outer[2] - outer[0], pixels.shape[2]),
            dtype=np.float32,
        )
        padded[
            viewport[1] - outer[1] : viewport[3] - outer[1],
            viewport[0] - outer[0] : viewport[2] - outer[0],
        ] = pixels
        return outer, padded

    def _apply(self, viewport: Viewport, coverage: np.ndarray, paint) -> None:
        """Composite ``paint`` through ``coverage`` into ``viewport``."""
        state = self._state
        if isinstance(paint, tuple) and len(paint) == 2:
            color, alpha = paint
        else:
            color, alpha = to_paint(paint).draw(viewport, state.matrix)
        shape = coverage * alpha
        clip = crop(state.clip, self.viewport, viewport)
        opacity = state.alpha if clip is None else state.alpha * clip

        if self._shadow_margin() > 0:
            sigma = state.shadow_blur / 2.0
            blurred = filters.gaussian(
                shape[:, :, 0].astype(np.float32),
                sigma=sigma,
                mode="constant",
                cval=0.0,
                preserve_range=True,
            )
            shadow = np.expand_dims(blurred.astype(np.float32), 2)
            shadow_color = np.array(state.shadow_color[:3], dtype=np.float32)
            self._composite(
                viewport,
                shadow_color.reshape((1, 1, 3)),
                shadow * state.shadow_color[3] * opacity,
            )

        self._composite(viewport, color, shape * opacity)

    def _composite(self, viewport, color, alpha):
        region = (
            slice(viewport[1], viewport[3]),
            slice(viewport[0], viewport[2]),
        )
        Cb, Ab = self._color[region], self._alpha[region]
        C, A = source_over(Cb, Ab, color, np.asarray(alpha, dtype=np.float32))
        self._color[region] = C
        self._alpha[region] = A


def _to_array(image: Image.Image) -> np.ndarray:
    pixels = np.asarray(image, dtype=np.float32) / 255.0
    if pixels.ndim == 2:
        pixels = np.expand_dims(pixels, 2)
    return pixels
