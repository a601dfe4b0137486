import asyncio
import base64
import logging

import pytest
from PIL import Image

from photobooth.api import pil_io
from photobooth.exceptions import DecodeError

from ..utils import GREEN, RED, make_data_uri, make_image

logger = logging.getLogger(__name__)


def test_encode_data_uri():
    uri = pil_io.encode_data_uri(make_image())
    assert uri.startswith("data:image/png;base64,")
    assert pil_io.is_data_uri(uri)


def test_decode_data_uri():
    payload = base64.b64encode(b"hello").decode("ascii")
    assert pil_io.decode_data_uri("data:text/plain;base64," + payload) == b"hello"
    assert pil_io.decode_data_uri("data:text/plain,abc") == b"abc"


@pytest.mark.parametrize("uri", ["data:image/png;base64", "image/png;base64,abc"])
def test_decode_data_uri_malformed(uri):
    with pytest.raises(DecodeError):
        pil_io.decode_data_uri(uri)


def test_decode_image_sources(tmp_path):
    image = make_image((5, 4), GREEN)
    path = tmp_path / "green.png"
    image.save(path)
    uri = pil_io.encode_data_uri(image)
    for source in (uri, path, str(path), path.read_bytes(), image):
        decoded = pil_io.decode_image(source)
        assert decoded.mode == "RGBA"
        assert decoded.size == (5, 4)
        assert decoded.getpixel((0, 0)) == GREEN


def test_decode_image_converts_mode():
    decoded = pil_io.decode_image(Image.new("L", (3, 3), 255))
    assert decoded.mode == "RGBA"
    assert decoded.getpixel((1, 1)) == (255, 255, 255, 255)


@pytest.mark.parametrize(
    "source",
    [
        "data:image/png;base64,bm90IGFuIGltYWdl",
        b"not an image",
        "/nonexistent/file.png",
        "data:image/png",
        12,
    ],
)
def test_decode_image_failure(source):
    with pytest.raises(DecodeError):
        pil_io.decode_image(source)


def test_load_image():
    image = asyncio.run(pil_io.load_image(make_data_uri((6, 6), RED)))
    assert image.size == (6, 6)
    assert asyncio.run(pil_io.load_image(b"broken")) is None


def test_download_image(tmp_path):
    uri = make_data_uri((3, 2))
    path = pil_io.download_image(uri, tmp_path / "out.png")
    with Image.open(path) as image:
        assert image.size == (3, 2)
