"""CLI for slide videos: slide images to an mp4.

Usage:
    # One image per frame at a constant rate
    slidecast slides --frames-dir slides/ --fps 1 --output slides.mp4

    # Each slide shown for its own duration (seconds)
    slidecast slides --frames-dir slides/ --durations 4,6.5,3 --output slides.mp4
"""

import argparse
import sys

from .errors import SlidecastError
from .slideshow import assemble_slideshow, build_slides_video


def _parse_durations(text):
    try:
        return [float(v) for v in text.split(",") if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid duration list: '{text}'")


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Build a slide video from NNNNN.png slide images.",
    )
    parser.add_argument(
        "--frames-dir", required=True,
        help="Directory holding 00000.png, 00001.png, ...",
    )
    parser.add_argument(
        "--output", required=True,
        help="Output mp4 path",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "--fps", type=int, default=None,
        help="Constant frame rate, one image per frame",
    )
    mode.add_argument(
        "--durations", type=_parse_durations, default=None,
        help="Comma-separated display time per slide, in seconds",
    )
    parsed = parser.parse_args(args)

    try:
        if parsed.durations is not None:
            print(f"Building {len(parsed.durations)} segments from {parsed.frames_dir}")
            assemble_slideshow(parsed.frames_dir, parsed.durations, parsed.output)
        else:
            print(f"Encoding {parsed.frames_dir}/*.png at {parsed.fps} fps")
            build_slides_video(parsed.frames_dir, parsed.fps, parsed.output)
    except (SlidecastError, ValueError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Done: {parsed.output}")


if __name__ == "__main__":
    main()
