"""
PIL IO module.

Image sources accepted everywhere in the API are data URIs, filesystem paths,
raw encoded bytes or already decoded :py:class:`PIL.Image.Image` objects.
Results are PNG data URIs.
"""

import asyncio
import base64
import binascii
import io
import logging
import os
from typing import Optional, Union

from PIL import Image

from photobooth.exceptions import DecodeError

logger = logging.getLogger(__name__)

Source = Union[str, bytes, os.PathLike, Image.Image]

_DATA_URI_PREFIX = "data:"


def is_data_uri(value) -> bool:
    return isinstance(value, str) and value.startswith(_DATA_URI_PREFIX)


def decode_data_uri(uri: str) -> bytes:
    """Return the payload of a ``data:`` URI."""
    header, sep, payload = uri.partition(",")
    if not sep or not header.startswith(_DATA_URI_PREFIX):
        raise DecodeError("Malformed data URI")
    try:
        if header.endswith(";base64"):
            return base64.b64decode(payload, validate=False)
        return payload.encode("latin-1")
    except (binascii.Error, ValueError) as e:
        raise DecodeError("Malformed data URI payload: %s" % e) from e


def encode_data_uri(image: Image.Image, format: str = "PNG", **kwargs) -> str:
    """
    Encode ``image`` into a base64 data URI. Extra keyword arguments are passed
    to :py:meth:`PIL.Image.Image.save`.
    """
    buffer = io.BytesIO()
    image.save(buffer, format=format, **kwargs)
    mime = Image.MIME.get(format.upper(), "image/%s" % format.lower())
    return "data:%s;base64,%s" % (
        mime,
        base64.b64encode(buffer.getvalue()).decode("ascii"),
    )


def decode_image(source: Source) -> Image.Image:
    """
    Decode an image source into a loaded RGBA PIL image.

    :raise DecodeError: when the source cannot be read or decoded.
    """
    if isinstance(source, Image.Image):
        image = source
    else:
        try:
            if isinstance(source, (bytes, bytearray)):
                data = bytes(source)
            elif is_data_uri(source):
                data = decode_data_uri(source)
            elif isinstance(source, (str, os.PathLike)):
                with open(source, "rb") as f:
                    data = f.read()
            else:
                raise DecodeError("Unsupported image source: %r" % type(source))
            image = Image.open(io.BytesIO(data))
            image.load()
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeError("Cannot decode image: %s" % e) from e
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return image


async def load_image(source: Source) -> Optional[Image.Image]:
    """
    Decode ``source`` off the event loop.

    Decode failures are logged and resolve to None.
    """
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, decode_image, source)
    except DecodeError as e:
        logger.warning("%s", e)
        return None


def download_image(data_uri: str, filename: Union[str, os.PathLike]) -> str:
    """
    Save an encoded image to ``filename``.

    :return: the written path.
    """
    data = decode_data_uri(data_uri)
    with open(filename, "wb") as f:
        f.write(data)
    logger.info("Saved %d bytes to %s", len(data), filename)
    return os.fspath(filename)
