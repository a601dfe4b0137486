import argparse
import asyncio
import json
import logging
import random
from typing import Optional

from photobooth.api.collage import create_collage
from photobooth.api.gif import create_gif
from photobooth.api.models import CollageLayout, CollageOptions, parse_overlays
from photobooth.api.pil_io import download_image, is_data_uri
from photobooth.api.pipeline import apply_filter_frame_and_overlays_to_image
from photobooth.constants import (
    COLLAGE_PRESETS,
    CollageStyle,
    Filter,
    Frame,
    Mask,
    TemplateId,
)
from photobooth.version import __version__

logger = logging.getLogger(__name__)


def _choices(enum):
    return [member.value for member in enum]


def _overlays(value: str):
    try:
        data = json.loads(value)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError("invalid overlay JSON: %s" % e)
    if not isinstance(data, list):
        raise argparse.ArgumentTypeError("overlays must be a JSON list")
    return parse_overlays(data)


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="photobooth command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    photo_parser = subparsers.add_parser(
        "photo", help="Apply a filter, frame and overlays to one image"
    )
    photo_parser.add_argument("input_file", help="Input image file")
    photo_parser.add_argument("output_file", help="Output PNG file")
    photo_parser.add_argument("--filter", default="none", choices=_choices(Filter))
    photo_parser.add_argument("--frame", default="none", choices=_choices(Frame))
    photo_parser.add_argument("--overlays", type=_overlays, default=[])
    photo_parser.add_argument("--seed", type=int, help="Seed for scatter frames")

    collage_parser = subparsers.add_parser("collage", help="Compose a grid collage")
    collage_parser.add_argument("output_file", help="Output PNG file")
    collage_parser.add_argument("input_files", nargs="+", help="Input image files")
    collage_parser.add_argument("--rows", type=int, default=2)
    collage_parser.add_argument("--cols", type=int, default=2)
    collage_parser.add_argument(
        "--preset", choices=sorted(COLLAGE_PRESETS), help="Grid preset"
    )
    collage_parser.add_argument(
        "--style", default="classic", choices=_choices(CollageStyle)
    )
    collage_parser.add_argument("--mask", default="rounded", choices=_choices(Mask))
    collage_parser.add_argument("--frame", default="none", choices=_choices(Frame))
    collage_parser.add_argument(
        "--template", default="none", choices=_choices(TemplateId)
    )
    collage_parser.add_argument("--title", default="")
    collage_parser.add_argument("--vertical", action="store_true")
    collage_parser.add_argument("--overlays", type=_overlays, default=[])
    collage_parser.add_argument("--seed", type=int, help="Seed for scatter frames")

    gif_parser = subparsers.add_parser("gif", help="Assemble an animated GIF")
    gif_parser.add_argument("output_file", help="Output GIF file")
    gif_parser.add_argument("input_files", nargs="+", help="Input image files")
    gif_parser.add_argument("--frame", default="none", choices=_choices(Frame))
    gif_parser.add_argument(
        "--delay", type=float, default=0.5, help="Seconds per frame"
    )
    gif_parser.add_argument("--width", type=int, default=640)
    gif_parser.add_argument("--height", type=int, default=480)

    return parser.parse_args(argv)


def _rng(seed: Optional[int]) -> Optional[random.Random]:
    return None if seed is None else random.Random(seed)


async def _photo(args) -> Optional[str]:
    return await apply_filter_frame_and_overlays_to_image(
        args.input_file, args.filter, args.frame, args.overlays, _rng(args.seed)
    )


async def _collage(args) -> Optional[str]:
    options = dict(
        style=args.style,
        mask=args.mask,
        frame=args.frame,
        template_id=args.template,
        title=args.title,
        vertical=args.vertical,
        overlays=args.overlays,
    )
    if args.preset:
        layout, cell_width, cell_height = CollageLayout.from_preset(args.preset)
        options.update(cell_width=cell_width, cell_height=cell_height)
    else:
        layout = CollageLayout(args.rows, args.cols)
    return await create_collage(
        args.input_files, layout, CollageOptions(**options), _rng(args.seed)
    )


async def _gif(args) -> Optional[str]:
    result = await create_gif(
        args.input_files,
        args.frame,
        delay=args.delay,
        width=args.width,
        height=args.height,
    )
    if result.error:
        logger.error("Cannot create GIF: %s", result.error_msg)
        return None
    return result.image


COMMANDS = {"photo": _photo, "collage": _collage, "gif": _gif}


def main(argv: Optional[list] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    if args.verbose:
        logging.getLogger("photobooth").setLevel(logging.DEBUG)
    else:
        logging.getLogger("photobooth").setLevel(logging.INFO)

    uri = asyncio.run(COMMANDS[args.command](args))
    if not uri or not is_data_uri(uri):
        logger.error("Nothing was rendered for %s", args.command)
        return 1
    download_image(uri, args.output_file)
    return None


if __name__ == "__main__":
    main()
