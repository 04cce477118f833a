"""ffmpeg argument builders.

Every builder is pure: it returns an EncoderArgs and touches nothing on
disk. EncoderArgs keeps the output path apart from the flags in front of
it, so options can be added later (quality, progress) without anyone
having to know where the output sits in the flat list. The flat list
handed to ffmpeg always ends with the output path.

Command shapes:
  - overlay composition: recording + slide video -> picture-in-picture.
  - image sequence: glob of stills at a constant frame rate.
  - still segment: one image looped for a fixed duration.
  - concat: stream-copy a list of segments into one file.
"""

from dataclasses import dataclass, field

from .domain import ForegroundKind, OverlayPosition, QualityProfile


# ── Output canvas ─────────────────────────────────────────────────

CANVAS_WIDTH = 1920
CANVAS_HEIGHT = 1080
CANVAS_SIZE = f"{CANVAS_WIDTH}x{CANVAS_HEIGHT}"
OUTPUT_FPS = 30
OVERLAY_MARGIN = 16
AUDIO_BITRATE = "192k"

# (x, y) overlay filter expressions. W/H are the background size, w/h
# the inset size, both evaluated by ffmpeg once the inset is scaled.
OVERLAY_OFFSETS = {
    OverlayPosition.TOP_LEFT: (f"{OVERLAY_MARGIN}", f"{OVERLAY_MARGIN}"),
    OverlayPosition.TOP_RIGHT: (f"W-w-{OVERLAY_MARGIN}", f"{OVERLAY_MARGIN}"),
    OverlayPosition.BOTTOM_LEFT: (f"{OVERLAY_MARGIN}", f"H-h-{OVERLAY_MARGIN}"),
    OverlayPosition.BOTTOM_RIGHT: (f"W-w-{OVERLAY_MARGIN}", f"H-h-{OVERLAY_MARGIN}"),
}

# Lower crf = higher fidelity and a slower encode.
QUALITY_SETTINGS = {
    QualityProfile.DRAFT: (32, "veryfast"),
    QualityProfile.STANDARD: (26, "medium"),
    QualityProfile.HIGH: (20, "slow"),
}

_H264 = ["-c:v", "libx264", "-pix_fmt", "yuv420p"]


@dataclass
class EncoderArgs:
    """One ffmpeg invocation: flags, then the output path."""

    flags: list[str] = field(default_factory=list)
    output_path: str = ""

    def add_output_options(self, *options: str) -> None:
        """Append options directly in front of the output path."""
        self.flags.extend(options)

    def add_global_options(self, *options: str) -> None:
        """Insert options at the very start of the command."""
        self.flags[0:0] = options

    def to_list(self) -> list[str]:
        return [*self.flags, self.output_path]

    def __str__(self):
        return " ".join(self.to_list())


# ── Builders ──────────────────────────────────────────────────────


def overlay_filter_graph(
    overlay_relative_width: float,
    position: OverlayPosition,
    foreground_kind: ForegroundKind,
) -> str:
    """Build the -filter_complex graph for the picture-in-picture layout.

    Input 0 is the recording and input 1 the slide video. The background
    is scaled to the full canvas, the inset to overlay_relative_width of
    the canvas width with its aspect ratio kept (height -1).
    """
    if foreground_kind is ForegroundKind.RECORDING:
        bg, fg = "1:v", "0:v"
    else:
        bg, fg = "0:v", "1:v"
    ox, oy = OVERLAY_OFFSETS[position]
    return (
        f"[{fg}]scale={CANVAS_WIDTH}*{overlay_relative_width}:-1[ov];"
        f"[{bg}]scale={CANVAS_WIDTH}:{CANVAS_HEIGHT}:flags=bicubic[bg];"
        f"[bg][ov]overlay={ox}:{oy}:eval=init:shortest=1,fps={OUTPUT_FPS}[vout]"
    )


def build_overlay_composition(
    main_path: str,
    overlay_path: str,
    output_path: str,
    overlay_relative_width: float,
    position: OverlayPosition,
    foreground_kind: ForegroundKind = ForegroundKind.SLIDES,
) -> EncoderArgs:
    """Compose the recording and the slide video into one 1080p30 mp4.

    Audio is taken from the main input when it has any ("0:a?"), so a
    silent recording still composes. -shortest clips the result to the
    shorter input; +faststart moves the index to the front of the file.

    Args:
        main_path: Recording (input 0, audio source).
        overlay_path: Slide video (input 1).
        output_path: Output mp4 path.
        overlay_relative_width: Inset width as a fraction of 1920.
        position: Corner the inset is placed in.
        foreground_kind: Which stream becomes the inset.
    """
    graph = overlay_filter_graph(overlay_relative_width, position, foreground_kind)
    flags = [
        "-y", "-hide_banner", "-loglevel", "warning",
        "-i", str(main_path),
        "-i", str(overlay_path),
        "-filter_complex", graph,
        "-map", "[vout]",
        "-map", "0:a?",
        *_H264,
        "-r", str(OUTPUT_FPS),
        "-s", CANVAS_SIZE,
        "-c:a", "aac", "-b:a", AUDIO_BITRATE,
        "-shortest",
        "-movflags", "+faststart",
    ]
    return EncoderArgs(flags, str(output_path))


def build_image_sequence_composition(
    image_glob_pattern: str, fps: int, output_path: str,
) -> EncoderArgs:
    """Encode a glob of still images (sorted by name) at a constant fps."""
    flags = [
        "-y",
        "-framerate", str(fps),
        "-pattern_type", "glob",
        "-i", str(image_glob_pattern),
        "-s", CANVAS_SIZE,
        *_H264,
    ]
    return EncoderArgs(flags, str(output_path))


def build_still_segment(
    image_path: str, duration: float, output_path: str,
) -> EncoderArgs:
    """Loop one still image for exactly `duration` seconds at 1080p30."""
    flags = [
        "-y",
        "-loop", "1",
        "-t", str(float(duration)),
        "-i", str(image_path),
        "-s", CANVAS_SIZE,
        "-r", str(OUTPUT_FPS),
        *_H264,
    ]
    return EncoderArgs(flags, str(output_path))


def build_concat(manifest_path: str, output_path: str) -> EncoderArgs:
    """Join the segments listed in a concat manifest without re-encoding.

    -safe 0 allows absolute paths in the manifest.
    """
    flags = [
        "-y",
        "-f", "concat",
        "-safe", "0",
        "-i", str(manifest_path),
        "-c", "copy",
    ]
    return EncoderArgs(flags, str(output_path))


# ── Quality ───────────────────────────────────────────────────────


def apply_quality(args: EncoderArgs, quality: QualityProfile) -> None:
    """Add -crf and -preset for the profile, just before the output path."""
    crf, preset = QUALITY_SETTINGS[quality]
    args.add_output_options("-crf", str(crf), "-preset", preset)
