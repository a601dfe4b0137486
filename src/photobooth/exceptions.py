"""
Exceptions raised inside the rendering engine.

The asynchronous API in :py:mod:`photobooth.api` recovers from these at its
boundary, so callers of the render functions normally never see them.
"""


class PhotoboothError(Exception):
    """Base class for photobooth errors."""


class SurfaceError(PhotoboothError):
    """A drawing surface of the requested size cannot be allocated."""


class DecodeError(PhotoboothError):
    """A source image cannot be decoded."""
