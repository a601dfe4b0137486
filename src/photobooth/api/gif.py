"""
Animated GIF assembly.

Frames are rendered through the single-image pipeline when a frame style is
selected, stretched to a fixed size and quantized against one palette shared
by the whole animation.
"""

import asyncio
import logging
from typing import Optional, Sequence

from attrs import define
from PIL import Image

from photobooth.api.pil_io import Source, decode_image, encode_data_uri
from photobooth.api.pipeline import apply_filter_frame_and_overlays_to_image
from photobooth.constants import Filter, Frame
from photobooth.exceptions import DecodeError

logger = logging.getLogger(__name__)

MIN_FRAMES = 2
PALETTE_SAMPLES = 5


@define
class GifResult:
    """Encoder outcome. ``image`` is a GIF data URI when ``error`` is False."""

    error: bool = False
    error_msg: str = ""
    image: str = ""

    def to_dict(self):
        return {"error": self.error, "errorMsg": self.error_msg, "image": self.image}


def _flatten(image: Image.Image, size) -> Image.Image:
    image = image.resize(size, Image.Resampling.LANCZOS)
    background = Image.new("RGBA", size, (255, 255, 255, 255))
    return Image.alpha_composite(background, image).convert("RGB")


def _global_palette(frames, colors: int = 256) -> Image.Image:
    step = max(1, len(frames) // PALETTE_SAMPLES)
    samples = frames[::step][:PALETTE_SAMPLES]
    width, height = samples[0].size
    sheet = Image.new("RGB", (width * len(samples), height))
    for index, frame in enumerate(samples):
        sheet.paste(frame, (index * width, 0))
    return sheet.quantize(colors=colors, method=Image.Quantize.FASTOCTREE)


def encode_gif(
    frames: Sequence[Source],
    width: int,
    height: int,
    frame_delay: float,
    frame_count: Optional[int] = None,
) -> GifResult:
    """
    Encode rendered frames into a looping animated GIF.

    :param frames: already composited frame sources, in play order.
    :param width: output width in pixels; every frame is stretched to it.
    :param height: output height in pixels.
    :param frame_delay: seconds each frame is shown.
    :param frame_count: number of frames to use, all of them by default.
    :return: :py:class:`GifResult`.
    """
    frames = list(frames)
    if frame_count is not None:
        frames = frames[: max(0, int(frame_count))]
    if not frames:
        return GifResult(error=True, error_msg="No frames to encode")
    try:
        size = (int(width), int(height))
        if size[0] <= 0 or size[1] <= 0:
            raise ValueError("Invalid GIF size %dx%d" % size)
        images = [_flatten(decode_image(frame), size) for frame in frames]
        palette = _global_palette(images)
        quantized = [
            image.quantize(palette=palette, dither=Image.Dither.FLOYDSTEINBERG)
            for image in images
        ]
        duration = max(1, int(round(frame_delay * 1000)))
        uri = encode_data_uri(
            quantized[0],
            format="GIF",
            save_all=True,
            append_images=quantized[1:],
            duration=duration,
            loop=0,
        )
    except (DecodeError, OSError, ValueError) as e:
        logger.warning("GIF encoding failed: %s", e)
        return GifResult(error=True, error_msg=str(e))
    logger.debug("Encoded %d GIF frames at %dx%d", len(quantized), *size)
    return GifResult(image=uri)


async def create_gif(
    sources: Sequence[Source],
    frame=Frame.NONE,
    overlays: Optional[Sequence] = None,
    delay: float = 0.5,
    width: int = 640,
    height: int = 480,
) -> GifResult:
    """
    Assemble photos into an animated GIF.

    The frame style and overlays are baked into every photo only when a frame
    other than ``none`` is selected.
    """
    sources = list(sources or ())
    if len(sources) < MIN_FRAMES:
        return GifResult(
            error=True, error_msg="At least %d photos are required" % MIN_FRAMES
        )
    if Frame(frame) != Frame.NONE:
        sources = await asyncio.gather(
            *(
                apply_filter_frame_and_overlays_to_image(
                    source, Filter.NONE, frame, overlays
                )
                for source in sources
            )
        )
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None, encode_gif, sources, width, height, delay, len(sources)
    )
