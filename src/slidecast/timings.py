"""Slide timing helpers: switch times and per-slide durations.

A timing sequence says when each slide appears in the recording. The
slideshow pipeline wants the opposite view: how long each slide stays
on screen. Slide 0 is shown from the start of the recording, so any
lead-in before its switch time is added to its duration.
"""

import math

from .domain import SlideTiming
from .validate import validate_timings

# Shortest duration clamp_durations_to_total will leave on the last slide.
MIN_SLIDE_DURATION = 0.1


def uniform_timings(pages: int, duration: float) -> list[SlideTiming]:
    """Spread `pages` slides evenly over `duration` seconds.

    Returns an empty list for a non-positive page count or a duration
    that is not a positive finite number.
    Times are rounded to milliseconds.
    """
    if not pages or pages <= 0 or not duration or not math.isfinite(duration) or duration <= 0:
        return []
    step = duration / pages
    return [SlideTiming(i, round(i * step, 3)) for i in range(pages)]


def clamp_durations_to_total(durations: list[float], total: float) -> list[float]:
    """Shorten the last duration so the sum does not exceed `total`.

    The last slide keeps at least MIN_SLIDE_DURATION seconds, so the sum
    can still exceed `total` when the earlier slides alone are too long.
    """
    result = list(durations)
    excess = sum(result) - total
    if excess > 0 and result:
        result[-1] = max(MIN_SLIDE_DURATION, result[-1] - excess)
    return result


def durations_from_timings(
    timings: list[SlideTiming], total_duration: float,
) -> list[float]:
    """Convert switch times into per-slide display durations.

    Slide i lasts until slide i + 1 appears; the last slide lasts until
    total_duration. The durations sum to total_duration.

    Raises:
        ValidationError: The timings themselves are invalid.
        ValueError: The last switch time is not before total_duration.
    """
    validate_timings(timings)
    last = timings[-1].time_seconds
    if last >= total_duration:
        raise ValueError(
            f"Last slide switch at {last}s is not before the end of the "
            f"recording ({total_duration}s)"
        )

    starts = [0.0] + [t.time_seconds for t in timings[1:]]
    ends = [t.time_seconds for t in timings[1:]] + [total_duration]
    return [round(end - start, 3) for start, end in zip(starts, ends)]
