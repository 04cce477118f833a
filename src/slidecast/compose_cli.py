"""CLI for composition: request manifest to picture-in-picture video.

Usage:
    # Slide video already rendered (manifest 'deck' points at it)
    slidecast compose --manifest request.yaml

    # Build the slide video from NNNNN.png slide images first
    slidecast compose --manifest request.yaml --frames-dir slides/

    # Validate only (no encoding)
    slidecast compose --manifest request.yaml --validate
"""

import argparse
import sys
import time

from .compose import build_composition_command, compose_presentation, slide_durations_for
from .config import resolve_ffmpeg
from .errors import SlidecastError
from .probe import probe_duration
from .progress import ProgressPrinter
from .request_manifest import load_request_manifest, validate_request_paths


def _print_request(request):
    print(f"Recording:  {request.recording_path}")
    print(f"Slides:     {request.source_deck_path}")
    print(f"Output:     {request.output_path}")
    print(
        f"Overlay:    {request.foreground_kind.value} inset, "
        f"{request.overlay_position.value}, width {request.overlay_relative_width}"
    )
    print(f"Quality:    {request.quality.value}")
    print(f"Timings:    {len(request.timings)} slides")


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Compose a slide video and a recording into one picture-in-picture video.",
    )
    parser.add_argument(
        "--manifest", required=True,
        help="Path to YAML request manifest",
    )
    parser.add_argument(
        "--frames-dir", default=None,
        help="Directory of NNNNN.png slide images; builds the slide video first",
    )
    parser.add_argument(
        "--validate", action="store_true",
        help="Validate request only: check fields and paths, no encoding",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Print the ffmpeg composition command and exit",
    )
    parsed = parser.parse_args(args)

    try:
        request = load_request_manifest(parsed.manifest)
        command = build_composition_command(request)
        validate_request_paths(request, check_deck=parsed.frames_dir is None)

        if parsed.validate:
            _print_request(request)
            print("Request valid. All paths verified.")
            return

        if parsed.dry_run:
            print(f"{resolve_ffmpeg()} {command}")
            return

        _print_request(request)
        expected = request.expected_duration_sec
        recording_duration = None
        if parsed.frames_dir is not None or expected is None:
            recording_duration = probe_duration(request.recording_path)
            expected = expected or recording_duration
        if parsed.frames_dir is not None:
            durations = slide_durations_for(request, recording_duration)
            print("Slide durations: " + ", ".join(f"{d:.2f}" for d in durations))

        t0 = time.monotonic()
        compose_presentation(
            request,
            frames_dir=parsed.frames_dir,
            on_line=ProgressPrinter(expected, label="Composing"),
            recording_duration=recording_duration,
        )
    except (SlidecastError, ValueError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"\nDone: {request.output_path} ({time.monotonic() - t0:.1f}s)")


if __name__ == "__main__":
    main()
