import asyncio
import io
import logging

import pytest
from PIL import Image

from photobooth.api import gif
from photobooth.api.gif import GifResult, create_gif, encode_gif
from photobooth.api.pil_io import decode_data_uri

from ..utils import BLUE, GREEN, RED, is_close, make_data_uri

logger = logging.getLogger(__name__)


def _open(uri):
    assert uri.startswith("data:image/gif;base64,")
    return Image.open(io.BytesIO(decode_data_uri(uri)))


def test_encode_gif():
    frames = [make_data_uri(color=c) for c in (RED, BLUE, GREEN)]
    result = encode_gif(frames, 64, 48, 0.2)
    assert not result.error
    image = _open(result.image)
    assert image.size == (64, 48)
    assert image.n_frames == 3
    assert image.info["duration"] == 200
    assert image.info["loop"] == 0
    assert is_close(image.convert("RGB").getpixel((10, 10)), RED[:3], 8)
    image.seek(1)
    assert is_close(image.convert("RGB").getpixel((10, 10)), BLUE[:3], 8)


def test_encode_gif_frame_count():
    frames = [make_data_uri(color=c) for c in (RED, BLUE, GREEN)]
    result = encode_gif(frames, 32, 32, 0.5, frame_count=2)
    assert _open(result.image).n_frames == 2


@pytest.mark.parametrize(
    "frames, width, height",
    [
        ([], 64, 48),
        (["data:image/png;base64,AAAA", "data:image/png;base64,AAAA"], 64, 48),
        ([make_data_uri(), make_data_uri(color=BLUE)], 0, 48),
    ],
)
def test_encode_gif_failure(frames, width, height):
    result = encode_gif(frames, width, height, 0.5)
    assert result.error
    assert result.error_msg
    assert result.image == ""


def test_gif_result_to_dict():
    assert GifResult(error=True, error_msg="boom").to_dict() == {
        "error": True,
        "errorMsg": "boom",
        "image": "",
    }


def test_create_gif_requires_two_photos():
    result = asyncio.run(create_gif([make_data_uri()]))
    assert result.error
    assert "2" in result.error_msg


def test_create_gif_defaults():
    sources = [make_data_uri(color=RED), make_data_uri(color=BLUE)]
    result = asyncio.run(create_gif(sources))
    image = _open(result.image)
    assert image.size == (640, 480)
    assert image.n_frames == 2
    assert image.info["duration"] == 500


@pytest.mark.parametrize("frame, baked", [("none", 0), ("polaroid", 2)])
def test_create_gif_bakes_frame(monkeypatch, frame, baked):
    calls = []

    async def render(source, filter, frame, overlays=None, rng=None):
        calls.append((filter, frame, overlays))
        return source

    monkeypatch.setattr(gif, "apply_filter_frame_and_overlays_to_image", render)
    sources = [make_data_uri(color=RED), make_data_uri(color=BLUE)]
    overlays = [{"type": "text", "text": "Hi"}]
    result = asyncio.run(create_gif(sources, frame, overlays, 0.1, 32, 24))
    assert not result.error
    assert len(calls) == baked
    for filter, used_frame, used_overlays in calls:
        assert filter == "none"
        assert used_frame == frame
        assert used_overlays == overlays
