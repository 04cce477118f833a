"""CLI for probing: print a video's duration in seconds.

Usage:
    slidecast probe recording.mp4
"""

import argparse

from .probe import probe_duration


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Print the duration of a video in seconds.",
    )
    parser.add_argument("video", help="Path to video file")
    parsed = parser.parse_args(args)

    print(f"{probe_duration(parsed.video):.3f}")


if __name__ == "__main__":
    main()
