"""CLI for encoder configuration.

Usage:
    slidecast config                              # show effective ffmpeg
    slidecast config --ffmpeg-path /usr/bin/ffmpeg
    slidecast config --clear                      # back to the default
"""

import argparse
import os

from .config import (
    FFMPEG_ENV_VAR,
    config_file_path,
    get_ffmpeg_path,
    resolve_ffmpeg,
    set_ffmpeg_path,
)


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Show or persist the ffmpeg binary slidecast runs.",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--ffmpeg-path", default=None,
        help="Store this ffmpeg binary in the config file",
    )
    group.add_argument(
        "--clear", action="store_true",
        help="Remove the stored ffmpeg binary",
    )
    parsed = parser.parse_args(args)

    if parsed.ffmpeg_path:
        path = set_ffmpeg_path(parsed.ffmpeg_path)
        print(f"Saved ffmpeg_path to {path}")
    elif parsed.clear:
        path = set_ffmpeg_path(None)
        print(f"Cleared ffmpeg_path in {path}")

    print(f"Config file: {config_file_path()}")
    print(f"Configured:  {get_ffmpeg_path() or '(not set)'}")
    if os.environ.get(FFMPEG_ENV_VAR):
        print(f"Override:    ${FFMPEG_ENV_VAR}")
    print(f"Effective:   {resolve_ffmpeg()}")


if __name__ == "__main__":
    main()
