"""Slideshow video from slide images.

Two modes:
  - uniform: every image is one frame at a constant fps
    (build_slides_video, a single ffmpeg call over a glob).
  - per-slide durations: each slide stays on screen for its own
    duration (assemble_slideshow).

ffmpeg has no direct "this still for N seconds, that one for M" input,
so assemble_slideshow encodes one segment per slide, all with identical
codec, size and frame rate, then joins them with the concat demuxer in
stream-copy mode. The final pass never re-encodes.

Failure policy: the first problem aborts the run. Segments already
encoded stay in the segments directory for inspection or reuse.
"""

from pathlib import Path

from .commands import build_concat, build_image_sequence_composition, build_still_segment
from .config import resolve_ffmpeg
from .errors import (
    ConcatenationFailed,
    EncodeError,
    MissingSlideImage,
    SegmentEncodeFailed,
    stderr_tail,
)
from .runner import Runner, run_process
from .slides import slide_image_path

SEGMENTS_DIRNAME = "segments"
CONCAT_MANIFEST_NAME = "concat.txt"


def segments_dir_for(output_path: str | Path) -> Path:
    """Segments live in a 'segments' directory next to the output."""
    return Path(output_path).absolute().parent / SEGMENTS_DIRNAME


def segment_path(segments_dir: Path, index: int) -> Path:
    return segments_dir / f"seg_{index:05d}.mp4"


def _quote_concat_path(path: Path) -> str:
    # concat demuxer quoting: close the quote, escaped quote, reopen.
    return "'" + str(path).replace("'", "'\\''") + "'"


def write_concat_manifest(manifest_path: Path, segment_paths: list[Path]) -> Path:
    """Write one `file '<path>'` line per segment, in the given order."""
    lines = [f"file {_quote_concat_path(p)}\n" for p in segment_paths]
    manifest_path.write_text("".join(lines))
    return manifest_path


def assemble_slideshow(
    frames_dir: str | Path,
    durations: list[float],
    output_path: str | Path,
    runner: Runner = run_process,
    ffmpeg: str | None = None,
) -> Path:
    """Build a slideshow where slide i is shown for durations[i] seconds.

    Processing pipeline:
      1. Create <output dir>/segments.
      2. For each slide: check NNNNN.png exists, encode seg_NNNNN.mp4.
      3. Write segments/concat.txt in index order.
      4. Stream-copy the segments into output_path.

    Args:
        frames_dir: Directory holding 00000.png, 00001.png, ...
        durations: Display time of each slide in seconds.
        output_path: Final mp4 path.
        runner: Process runner, run(binary, args) -> ProcessResult.
        ffmpeg: Encoder binary. Resolved from config when None.

    Returns:
        The output path.

    Raises:
        ValueError: No durations, or a non-positive duration.
        MissingSlideImage: A slide image is absent (nothing is encoded
            for it or any later slide).
        SegmentEncodeFailed: ffmpeg failed on one segment.
        ConcatenationFailed: ffmpeg failed joining the segments.
        ProcessInvocationFailed: ffmpeg could not be started.
    """
    if not durations:
        raise ValueError("No slide durations given")
    for i, d in enumerate(durations):
        if not d > 0:
            raise ValueError(f"Slide {i}: duration must be > 0, got {d}")

    ffmpeg = ffmpeg or resolve_ffmpeg()
    output_path = Path(output_path)
    seg_dir = segments_dir_for(output_path)
    seg_dir.mkdir(parents=True, exist_ok=True)

    segments = []
    for i, duration in enumerate(durations):
        image = slide_image_path(frames_dir, i)
        if not image.exists():
            raise MissingSlideImage(i, image)

        seg = segment_path(seg_dir, i)
        print(f"  SEGMENT {i:05d}  {duration:.2f}s  {image.name}")
        result = runner(ffmpeg, build_still_segment(str(image), duration, str(seg)))
        if not result.ok:
            raise SegmentEncodeFailed(i, result.returncode, result.stderr)
        segments.append(seg)

    manifest = write_concat_manifest(seg_dir / CONCAT_MANIFEST_NAME, segments)

    print(f"  CONCAT  {len(segments)} segments -> {output_path}")
    result = runner(ffmpeg, build_concat(str(manifest), str(output_path)))
    if not result.ok:
        raise ConcatenationFailed(result.returncode, result.stderr)
    return output_path


def build_slides_video(
    frames_dir: str | Path,
    fps: int,
    output_path: str | Path,
    runner: Runner = run_process,
    ffmpeg: str | None = None,
) -> Path:
    """Encode every *.png in frames_dir, in name order, at a constant fps.

    Raises:
        ValueError: fps is not positive.
        FileNotFoundError: frames_dir has no PNG images.
        EncodeError: ffmpeg failed.
    """
    if fps <= 0:
        raise ValueError(f"fps must be > 0, got {fps}")
    frames_dir = Path(frames_dir)
    if not any(frames_dir.glob("*.png")):
        raise FileNotFoundError(f"No PNG images in {frames_dir}")

    ffmpeg = ffmpeg or resolve_ffmpeg()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    args = build_image_sequence_composition(str(frames_dir / "*.png"), fps, str(output_path))
    result = runner(ffmpeg, args)
    if not result.ok:
        msg = f"ffmpeg failed building slide video (exit status {result.returncode})"
        if tail := stderr_tail(result.stderr):
            msg += f"\n{tail}"
        raise EncodeError(msg)
    return output_path
