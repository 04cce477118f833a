"""Composition job: request in, picture-in-picture video out.

The request is always validated before anything is spawned, so an
invalid request leaves no files behind.
"""

from pathlib import Path
from typing import Callable

from .commands import EncoderArgs, apply_quality, build_overlay_composition
from .config import resolve_ffmpeg
from .domain import CompositionRequest
from .errors import CompositionFailed
from .probe import probe_duration
from .progress import PROGRESS_FLAGS
from .runner import Runner, run_process
from .slideshow import assemble_slideshow
from .timings import clamp_durations_to_total, durations_from_timings
from .validate import validate_request


def build_composition_command(request: CompositionRequest) -> EncoderArgs:
    """Validate the request and return its ffmpeg arguments.

    The recording is the main input (and audio source); the slide video
    is the second input.

    Raises:
        ValidationError: The request is invalid.
    """
    validate_request(request)
    args = build_overlay_composition(
        request.recording_path,
        request.source_deck_path,
        request.output_path,
        request.overlay_relative_width,
        request.overlay_position,
        request.foreground_kind,
    )
    apply_quality(args, request.quality)
    return args


def compose_video(
    request: CompositionRequest,
    runner: Runner = run_process,
    ffmpeg: str | None = None,
    on_line: Callable[[str], None] | None = None,
) -> Path:
    """Run the overlay composition for a request.

    Args:
        request: The composition job.
        runner: Process runner, run(binary, args[, on_line]) -> ProcessResult.
        ffmpeg: Encoder binary. Resolved from config when None.
        on_line: If set, ffmpeg writes -progress output to stderr and each
            line is passed here.

    Raises:
        ValidationError: The request is invalid (nothing is run).
        CompositionFailed: ffmpeg exited with a non-zero status.
        ProcessInvocationFailed: ffmpeg could not be started.
    """
    args = build_composition_command(request)
    ffmpeg = ffmpeg or resolve_ffmpeg()
    Path(request.output_path).parent.mkdir(parents=True, exist_ok=True)

    if on_line is None:
        result = runner(ffmpeg, args)
    else:
        args.add_global_options(*PROGRESS_FLAGS)
        result = runner(ffmpeg, args, on_line=on_line)

    if not result.ok:
        raise CompositionFailed(result.returncode, result.stderr)
    return Path(request.output_path)


def slide_durations_for(
    request: CompositionRequest, recording_duration: float,
) -> list[float]:
    """Per-slide display durations that line up with the recording."""
    durations = durations_from_timings(list(request.timings), recording_duration)
    return clamp_durations_to_total(durations, recording_duration)


def compose_presentation(
    request: CompositionRequest,
    frames_dir: str | Path | None = None,
    runner: Runner = run_process,
    ffmpeg: str | None = None,
    on_line: Callable[[str], None] | None = None,
    recording_duration: float | None = None,
) -> Path:
    """Full job: optionally build the slide video, then compose.

    With frames_dir, the slide video is produced at the request's
    source_deck_path from NNNNN.png images, each slide lasting from its
    switch time to the next one (the last until the recording ends).
    Without it, source_deck_path must already be a video.

    Args:
        request: The composition job.
        frames_dir: Directory of rendered slide images, or None.
        runner: Process runner shared by every step.
        ffmpeg: Encoder binary. Resolved from config when None.
        on_line: Progress callback for the composition step.
        recording_duration: Skip probing when already known.

    Raises:
        ValidationError: The request is invalid (nothing is run).
        ValueError: Timings extend past the end of the recording.
        EncodeError: Any ffmpeg step failed.
    """
    validate_request(request)
    ffmpeg = ffmpeg or resolve_ffmpeg()

    if frames_dir is not None:
        if recording_duration is None:
            recording_duration = probe_duration(request.recording_path)
        durations = slide_durations_for(request, recording_duration)
        print(f"Building slide video: {len(durations)} slides, {sum(durations):.1f}s")
        assemble_slideshow(
            frames_dir, durations, request.source_deck_path,
            runner=runner, ffmpeg=ffmpeg,
        )

    print(f"Composing {request.output_path}")
    return compose_video(request, runner=runner, ffmpeg=ffmpeg, on_line=on_line)
