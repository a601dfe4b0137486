"""
Value types of the compositing API.

Overlays, layouts and options are attrs classes. Every type also accepts the
plain dict shape used by browser clients (``fontSize``, ``outlineColor``,
``bgColor``...) through its ``from_dict`` constructor; snake_case keys work as
well.
"""

import logging
import re
import time
import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from attrs import asdict, define, field, fields

from photobooth.constants import (
    COLLAGE_PRESETS,
    DEFAULT_EMOJIS,
    PRESET_CELL_BASE,
    CollageStyle,
    Filter,
    Frame,
    Mask,
    OverlayType,
    TemplateId,
    TextAlign,
)

logger = logging.getLogger(__name__)

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(key: str) -> str:
    return _CAMEL.sub("_", key).lower()


def camel_case(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(word.capitalize() for word in rest)


def new_id(prefix: str) -> str:
    return "%s-%s" % (prefix, uuid.uuid4().hex[:8])


def _from_dict(cls, data: Dict[str, Any]):
    names = {a.name for a in fields(cls)}
    kwargs = {}
    for key, value in data.items():
        name = snake_case(key)
        if name in names:
            kwargs[name] = value
        elif key not in ("type",):
            logger.debug("Ignore unknown %s key %r", cls.__name__, key)
    return cls(**kwargs)


def _to_dict(obj) -> Dict[str, Any]:
    result = {}
    for key, value in asdict(obj, recurse=False).items():
        if hasattr(value, "value"):
            value = value.value
        result[camel_case(key)] = value
    return result


@define
class TextOverlay:
    """
    Text placed at a normalized position.

    ``x`` is a fraction of the canvas width and ``y`` of its height. The
    outline is drawn when ``outline_width > 0`` and the shadow when
    ``shadow_blur > 0``.
    """

    text: str = ""
    x: float = 0.5
    y: float = 0.5
    font_size: float = 24.0
    color: str = "#ffffff"
    bold: bool = False
    align: TextAlign = field(default=TextAlign.CENTER, converter=TextAlign)
    font_family: str = "sans-serif"
    outline_color: Optional[str] = None
    outline_width: float = 0.0
    shadow_color: Optional[str] = None
    shadow_blur: float = 0.0
    rotation: float = 0.0
    opacity: float = 1.0
    id: str = field(factory=lambda: new_id("txt"))

    type = OverlayType.TEXT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TextOverlay":
        return _from_dict(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        return dict(_to_dict(self), type=self.type.value)


@define
class ShapeOverlay:
    """
    Vector glyph (``heart``, ``star`` or ``sparkle``) at a normalized position.
    """

    shape: str = "heart"
    x: float = 0.5
    y: float = 0.5
    size: float = 28.0
    fill: str = "#f472b6"
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None
    rotation: float = 0.0
    opacity: float = 1.0
    id: str = field(factory=lambda: new_id("shp"))

    type = OverlayType.SHAPE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ShapeOverlay":
        return _from_dict(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        return dict(_to_dict(self), type=self.type.value)


Overlay = Union[TextOverlay, ShapeOverlay]

_OVERLAY_TYPES = {
    OverlayType.TEXT.value: TextOverlay,
    OverlayType.SHAPE.value: ShapeOverlay,
}


def parse_overlay(value) -> Optional[Overlay]:
    """
    Coerce an overlay object or dict. Unknown types resolve to None.
    """
    if isinstance(value, (TextOverlay, ShapeOverlay)):
        return value
    if not isinstance(value, dict):
        logger.debug("Skip overlay of type %s", type(value).__name__)
        return None
    kind = _OVERLAY_TYPES.get(str(value.get("type")))
    if kind is None:
        logger.debug("Skip overlay with unknown type %r", value.get("type"))
        return None
    try:
        return kind.from_dict(value)
    except (TypeError, ValueError) as e:
        logger.warning("Skip malformed overlay %r: %s", value.get("id"), e)
        return None


def parse_overlays(values: Optional[Sequence]) -> List[Overlay]:
    overlays = []
    for value in values or ():
        overlay = parse_overlay(value)
        if overlay is not None:
            overlays.append(overlay)
    return overlays


def overlay_to_dict(overlay: Overlay) -> Dict[str, Any]:
    return overlay.to_dict()


@define(frozen=True)
class CollageLayout:
    """Grid of ``rows`` x ``cols`` cells."""

    rows: int = field(default=2, converter=int)
    cols: int = field(default=2, converter=int)

    @property
    def slots(self) -> int:
        return self.rows * self.cols

    @classmethod
    def from_value(cls, value) -> "CollageLayout":
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            return cls(value.get("rows", 2), value.get("cols", 2))
        rows, cols = value
        return cls(rows, cols)

    @classmethod
    def from_preset(cls, preset: str) -> Tuple["CollageLayout", int, int]:
        """
        Resolve a picker preset such as ``h-2x3``.

        :return: tuple of the layout, cell width and cell height.
        """
        rows, cols, aspect = COLLAGE_PRESETS[preset]
        base = PRESET_CELL_BASE
        if aspect == "landscape":
            cell_width, cell_height = base, int(round(base * 3 / 4))
        else:
            cell_width, cell_height = int(round(base * 3 / 4)), base
        return cls(rows, cols), cell_width, cell_height


def _emojis(value) -> Tuple[str, ...]:
    if not value:
        return DEFAULT_EMOJIS
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@define
class CollageOptions:
    """
    Rendering options of :py:func:`~photobooth.api.collage.create_collage`.
    """

    cell_width: int = 400
    cell_height: int = 300
    padding: float = 8
    bg_color: str = "#ffffff"
    corner_radius: float = 16
    style: CollageStyle = field(default=CollageStyle.CLASSIC, converter=CollageStyle)
    emojis: Tuple[str, ...] = field(default=DEFAULT_EMOJIS, converter=_emojis)
    overlay_url: Optional[Any] = None
    mask: Mask = field(default=Mask.ROUNDED, converter=Mask)
    vertical: bool = False
    frame: Frame = field(default=Frame.NONE, converter=Frame)
    overlays: Tuple[Any, ...] = field(default=(), converter=lambda v: tuple(v or ()))
    template_id: TemplateId = field(default=TemplateId.NONE, converter=TemplateId)
    title: str = ""

    @classmethod
    def from_value(cls, value) -> "CollageOptions":
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return _from_dict(cls, dict(value))


@define
class Photo:
    """
    A capture result. ``filter``, ``frame`` and ``overlays`` record how the
    image was made; they are never reapplied.
    """

    image: str
    filter: Filter = field(default=Filter.NONE, converter=Filter)
    frame: Frame = field(default=Frame.NONE, converter=Frame)
    overlays: Tuple[Any, ...] = field(default=(), converter=lambda v: tuple(v or ()))
    timestamp: float = field(factory=time.time)
    id: str = field(factory=lambda: new_id("photo"))
