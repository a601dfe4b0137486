"""
Various constants for photobooth.

Every visual option is a closed string enumeration. Tag enums resolve an
unrecognized value to their first member, which is always the no-op choice,
so a bad tag degrades to "no effect" instead of raising.
"""
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class TagEnum(str, Enum):
    """
    String enumeration whose unknown values fall back to the first member.
    """

    @classmethod
    def _missing_(cls, value):
        fallback = next(iter(cls))
        logger.debug("Unknown %s tag %r, using %r", cls.__name__, value, fallback.value)
        return fallback

    def __str__(self):
        return self.value


class Filter(TagEnum):
    """
    Pixel filter.
    """
    NONE = "none"
    GRAYSCALE = "grayscale"
    SEPIA = "sepia"
    VINTAGE = "vintage"
    WARM = "warm"
    COOL = "cool"
    BRIGHT = "bright"
    CONTRAST = "contrast"


class Frame(TagEnum):
    """
    Decorative frame style.
    """
    NONE = "none"
    POLAROID = "polaroid"
    FILM = "film"
    NEON = "neon"
    GOLD = "gold"
    TAPE = "tape"
    CHRISTMAS = "christmas"
    TET = "tet"
    BIRTHDAY = "birthday"
    WEDDING = "wedding"
    # Pastel/sticker styles
    PASTEL_1 = "pastel-1"
    PASTEL_2 = "pastel-2"
    OCEAN = "ocean"
    SCHOOL = "school"
    BUBBLE = "bubble"
    STICKER = "sticker"
    COMIC = "comic"
    FLOWER = "flower"
    # Pink vibrant set
    HEARTS = "hearts"
    SPARKLE = "sparkle"
    RIBBON = "ribbon"
    CANDY = "candy"
    BLOSSOM = "blossom"
    KAWAII = "kawaii"


class Mask(TagEnum):
    """
    Clip shape applied to a collage cell.
    """
    NONE = "none"
    ROUNDED = "rounded"
    CIRCLE = "circle"
    OVAL = "oval"


class CollageStyle(TagEnum):
    """
    Visual style applied uniformly to collage cells.
    """
    CLASSIC = "classic"
    POLAROID = "polaroid"
    EMOJI = "emoji"
    MODERN = "modern"


class TemplateId(TagEnum):
    """
    Page-level collage template.
    """
    NONE = "none"
    DUAL_STRIP_PINK = "dual-strip-pink"
    CURVED_PASTEL_BOARD = "curved-pastel-board"
    STICKER_SHEET = "sticker-sheet"


class TextAlign(TagEnum):
    """
    Horizontal text alignment.
    """
    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"


class TextBaseline(TagEnum):
    """
    Vertical text anchor.
    """
    ALPHABETIC = "alphabetic"
    MIDDLE = "middle"
    TOP = "top"
    BOTTOM = "bottom"


class OverlayType(str, Enum):
    """
    Overlay variant. Unknown types are skipped by the renderer.
    """
    TEXT = "text"
    SHAPE = "shape"


class ShapeKind(str, Enum):
    """
    Vector glyph of a shape overlay. Unknown kinds are skipped by the renderer.
    """
    HEART = "heart"
    STAR = "star"
    SPARKLE = "sparkle"


#: Largest pixel area a drawing surface may allocate.
MAX_CANVAS_AREA = 8192 * 8192

#: Caption used by page templates when no title is given.
DEFAULT_TITLE = "PhotoBooth"

DEFAULT_EMOJIS = ("✨", "📸", "💜", "🌈", "🎉")

EMOJI_SETS = {
    "cute": (
        "✨", "💖", "🎀", "🌸", "⭐", "🍓", "🦄", "💜", "🌈", "📸",
    ),
    "sweet": ("🍬", "🍭", "🍩", "🍓", "🧁", "🍒"),
    "party": ("🎉", "🎈", "🎊", "🥳", "🎵", "✨"),
    "animals": ("🐶", "🐱", "🐰", "🐻", "🦊", "🐼"),
}

#: Grid presets of the collage picker: (rows, cols, cell aspect).
COLLAGE_PRESETS = {
    "h-2x2": (2, 2, "landscape"),
    "h-2x3": (2, 3, "landscape"),
    "h-2x4": (2, 4, "landscape"),
    "v-2x2": (2, 2, "portrait"),
    "v-3x2": (3, 2, "portrait"),
    "v-4x2": (4, 2, "portrait"),
}

#: Base cell edge for presets; the other edge is 3/4 of it.
PRESET_CELL_BASE = 480

#: Fill used for emoji glyphs when the font has no color bitmaps.
EMOJI_COLOR = "#ec4899"

#: Caption of the ``modern`` collage style.
MODERN_TITLE = "✨ Collage ✨"
