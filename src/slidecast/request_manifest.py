"""Composition request manifest: YAML in, CompositionRequest out.

Follows the same ${var} path resolution as the other manifests. Shape
errors (missing fields, wrong types) raise ValueError here; semantic
checks (overlay width range, timing order) are left to
slidecast.validate so the caller decides when to run them.

Request manifest schema:
  paths:
    talk: "/data/talk"
  deck: "${talk}/slides.mp4"
  recording: "${talk}/camera.mp4"
  output: "${talk}/final.mp4"
  overlay:
    position: bottom-right      # default: top-right
    width: 0.25                 # default: 0.25
    foreground: slides          # default: slides ("recording" or "video")
  quality: standard             # required: draft | standard | high
  fps: 30                       # optional
  output_size: [1920, 1080]     # optional
  expected_duration: 600.0      # optional, seconds
  timings:                      # switch times, seconds
    - 0.0
    - 12.5
    # or explicit: - {slide: 0, time: 0.0}
"""

from pathlib import Path

import yaml

from .common import resolve_path_vars
from .domain import (
    CompositionRequest,
    ForegroundKind,
    OverlayPosition,
    QualityProfile,
    SlideTiming,
    parse_enum,
)


def _number(value, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Request manifest: {field_name} must be a number, got {value!r}")
    return float(value)


def _positive_int(value, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"Request manifest: {field_name} must be a positive integer, got {value!r}")
    return value


def _optional_int(raw: dict, key: str) -> int | None:
    if raw.get(key) is None:
        return None
    return _positive_int(raw[key], key)


def parse_timings(entries: list) -> tuple[SlideTiming, ...]:
    """Parse timing entries, either bare times or {slide, time} mappings.

    Bare times take their index from their position. Explicit indices
    are kept as written so validation can reject gaps or reordering.
    """
    if not isinstance(entries, list):
        raise ValueError("Request manifest: timings must be a list")

    timings = []
    for i, entry in enumerate(entries):
        if isinstance(entry, dict):
            if "time" not in entry:
                raise ValueError(f"Timing {i}: missing required field 'time'")
            slide = entry.get("slide", i)
            if isinstance(slide, bool) or not isinstance(slide, int) or slide < 0:
                raise ValueError(f"Timing {i}: slide must be an integer >= 0, got {slide!r}")
            timings.append(SlideTiming(slide, _number(entry["time"], f"timings[{i}].time")))
        else:
            timings.append(SlideTiming(i, _number(entry, f"timings[{i}]")))
    return tuple(timings)


def parse_request(raw: dict) -> CompositionRequest:
    """Build a CompositionRequest from an already-parsed mapping.

    Raises:
        ValueError: Missing/invalid fields.
    """
    if not isinstance(raw, dict):
        raise ValueError("Request manifest: expected a mapping at the top level")

    for key in ("deck", "recording", "output", "quality"):
        if raw.get(key) is None:
            raise ValueError(f"Request manifest: missing required '{key}' field")

    paths = raw.get("paths") or {}
    deck = resolve_path_vars(str(raw["deck"]), paths)
    recording = resolve_path_vars(str(raw["recording"]), paths)
    output = resolve_path_vars(str(raw["output"]), paths)

    overlay = raw.get("overlay") or {}
    if not isinstance(overlay, dict):
        raise ValueError("Request manifest: overlay must be a mapping")
    position = parse_enum(OverlayPosition, overlay.get("position", "top-right"))
    width = _number(overlay.get("width", 0.25), "overlay.width")
    foreground = parse_enum(ForegroundKind, overlay.get("foreground", "slides"))
    quality = parse_enum(QualityProfile, raw["quality"])

    output_width = output_height = None
    if raw.get("output_size") is not None:
        size = raw["output_size"]
        if not isinstance(size, (list, tuple)) or len(size) != 2:
            raise ValueError(
                f"Request manifest: output_size must be [width, height], got {size!r}"
            )
        output_width, output_height = (_positive_int(v, "output_size") for v in size)

    expected = raw.get("expected_duration")
    if expected is not None:
        expected = _number(expected, "expected_duration")

    return CompositionRequest(
        source_deck_path=deck,
        recording_path=recording,
        output_path=output,
        overlay_position=position,
        overlay_relative_width=width,
        foreground_kind=foreground,
        quality=quality,
        fps=_optional_int(raw, "fps"),
        output_width=output_width,
        output_height=output_height,
        expected_duration_sec=expected,
        timings=parse_timings(raw.get("timings") or []),
    )


def load_request_manifest(manifest_path: str | Path) -> CompositionRequest:
    """Load a YAML request manifest.

    Raises:
        ValueError: Missing/invalid fields.
    """
    with open(manifest_path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Request manifest {manifest_path}: {e}") from e
    return parse_request(raw)


def validate_request_paths(request: CompositionRequest, check_deck: bool = True) -> None:
    """Check that the input media exist on disk.

    Raises:
        FileNotFoundError: Lists all missing files.
    """
    inputs = [request.recording_path]
    if check_deck:
        inputs.append(request.source_deck_path)
    missing = [p for p in inputs if not Path(p).exists()]

    if missing:
        msg = f"Missing {len(missing)} input file(s):\n"
        for p in missing:
            msg += f"  - {p}\n"
        raise FileNotFoundError(msg)
