"""
Registry pattern utility for style dispatch tables.

Filters, frame styles, overlay kinds and page templates are closed sets of
tags, each mapped to an independent handler. ``new_registry`` returns the
lookup table and a decorator that fills it::

    FRAMES, register = new_registry(attribute="frame")

    @register(Frame.NEON)
    def _draw_neon(surface, x0, y0, w, h, rng):
        ...

    FRAMES[Frame.NEON](surface, 0, 0, 100, 100, rng)
"""

from typing import Any, Callable, Tuple, TypeVar, Union

T = TypeVar("T")


def new_registry(attribute: Union[str, None] = None) -> Tuple[dict, Callable]:
    """
    Returns an empty dict and a @register decorator.

    :param attribute: Optional attribute name to set on registered objects.
                     The key will be stored as this attribute on the object.
    :return: Tuple of (registry_dict, register_decorator)
    """
    registry = {}

    def register(key: Any) -> Callable[[Callable[..., T]], Callable[..., T]]:
        def decorator(func: Callable[..., T]) -> Callable[..., T]:
            registry[key] = func
            if attribute:
                setattr(func, attribute, key)
            return func

        return decorator

    return registry, register
