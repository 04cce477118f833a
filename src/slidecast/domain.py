"""Composition request model: enums and records shared by every stage.

The request is the unit of work: one slide deck, one recording, one
output. Serialized names (used by the YAML request manifest) are the
enum values.
"""

from dataclasses import dataclass, field
from enum import Enum


class OverlayPosition(Enum):
    """Screen corner for the picture-in-picture inset."""

    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


class ForegroundKind(Enum):
    """Which stream is drawn as the small inset."""

    SLIDES = "slides"
    RECORDING = "recording"


class QualityProfile(Enum):
    """Encoder speed/quality trade-off."""

    DRAFT = "draft"
    STANDARD = "standard"
    HIGH = "high"


# "video" is what older request files call the recording.
_FOREGROUND_ALIASES = {"video": ForegroundKind.RECORDING}


def parse_enum(enum_cls, value):
    """Look up an enum member by serialized value or member name.

    Accepts 'top-right', 'TOP_RIGHT' and 'top_right' alike.

    Raises:
        ValueError: Unknown value, listing the valid ones.
    """
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip()
    if enum_cls is ForegroundKind and text.lower() in _FOREGROUND_ALIASES:
        return _FOREGROUND_ALIASES[text.lower()]
    for member in enum_cls:
        if text.lower() == member.value or text.upper().replace("-", "_") == member.name:
            return member
    valid = sorted(m.value for m in enum_cls)
    raise ValueError(f"Invalid {enum_cls.__name__} '{value}'. Valid: {valid}")


@dataclass(frozen=True)
class SlideTiming:
    """Moment in the recording at which a slide becomes visible."""

    slide_index: int
    time_seconds: float


@dataclass(frozen=True)
class CompositionRequest:
    """One composition job.

    source_deck_path is the slide video composited with the recording.
    output_width/output_height are carried for callers but the canvas is
    always 1920x1080. expected_duration_sec only drives progress reporting.
    """

    source_deck_path: str
    recording_path: str
    output_path: str
    overlay_position: OverlayPosition = OverlayPosition.TOP_RIGHT
    overlay_relative_width: float = 0.25
    foreground_kind: ForegroundKind = ForegroundKind.SLIDES
    quality: QualityProfile = QualityProfile.STANDARD
    fps: int | None = None
    output_width: int | None = None
    output_height: int | None = None
    expected_duration_sec: float | None = None
    timings: tuple[SlideTiming, ...] = field(default_factory=tuple)
