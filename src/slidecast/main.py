"""Subcommand dispatcher for slidecast.

Usage:
    slidecast compose --manifest request.yaml [--frames-dir slides/]
    slidecast slides  --frames-dir slides/ --durations 4,6.5,3 --output slides.mp4
    slidecast probe   recording.mp4
    slidecast config  --ffmpeg-path /opt/ffmpeg/bin/ffmpeg
"""

import argparse
import sys


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="slidecast",
        description="Picture-in-picture presentation videos from slides and a recording.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands. Each delegates to its own module's main().
    subparsers.add_parser("compose", help="Compose slides and recording from a request manifest")
    subparsers.add_parser("slides", help="Build a slide video from slide images")
    subparsers.add_parser("probe", help="Print the duration of a video")
    subparsers.add_parser("config", help="Show or set the ffmpeg binary")

    # Parse only the subcommand name, pass the rest to the subcommand's parser.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    if parsed.command == "compose":
        from .compose_cli import main as compose_main
        compose_main(remaining)
    elif parsed.command == "slides":
        from .slides_cli import main as slides_main
        slides_main(remaining)
    elif parsed.command == "probe":
        from .probe_cli import main as probe_main
        probe_main(remaining)
    elif parsed.command == "config":
        from .config_cli import main as config_main
        config_main(remaining)


if __name__ == "__main__":
    main()
