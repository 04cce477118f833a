"""Composition request validation.

Pure checks, run before any command is built so that an invalid request
never spawns ffmpeg. Only the first failing check is reported.
"""

from .domain import CompositionRequest, SlideTiming
from .errors import (
    EmptyTimings,
    InvalidSlideIndices,
    NonIncreasingTimings,
    OverlayWidthOutOfRange,
)

MIN_OVERLAY_WIDTH = 0.05
MAX_OVERLAY_WIDTH = 0.5


def validate_timings(timings: list[SlideTiming]) -> None:
    """Check a slide timing sequence.

    Indices must be exactly 0, 1, 2, ... in order, and times strictly
    increasing (two slides cannot switch at the same instant).

    Raises:
        EmptyTimings: No timings at all.
        InvalidSlideIndices: An index differs from its position.
        NonIncreasingTimings: time[i] >= time[i + 1] for some i.
    """
    if not timings:
        raise EmptyTimings()

    for position, timing in enumerate(timings):
        if timing.slide_index != position:
            raise InvalidSlideIndices(position, timing.slide_index)

    for i in range(len(timings) - 1):
        current = timings[i].time_seconds
        following = timings[i + 1].time_seconds
        if not current < following:
            raise NonIncreasingTimings(i, current, following)


def validate_request(request: CompositionRequest) -> None:
    """Check overlay width, then the timing sequence.

    Raises:
        OverlayWidthOutOfRange: Width outside [0.05, 0.5] (inclusive).
        ValidationError: Any timing error from validate_timings.
    """
    width = request.overlay_relative_width
    # Written so that NaN is rejected too.
    if not (MIN_OVERLAY_WIDTH <= width <= MAX_OVERLAY_WIDTH):
        raise OverlayWidthOutOfRange(width, MIN_OVERLAY_WIDTH, MAX_OVERLAY_WIDTH)
    validate_timings(list(request.timings))
