"""ffmpeg -progress parsing.

With `-progress pipe:2` ffmpeg writes key=value lines to stderr. Encoded
position comes as out_time_us / out_time_ms (both microseconds, the
latter misnamed by ffmpeg) or out_time=HH:MM:SS.micro.
"""

import re

PROGRESS_FLAGS = ("-progress", "pipe:2")

# Keys ffmpeg writes in each -progress block, besides per-stream
# stream_<file>_<stream>_<stat> entries.
PROGRESS_KEYS = frozenset({
    "frame", "fps", "bitrate", "total_size", "out_time_us", "out_time_ms",
    "out_time", "dup_frames", "drop_frames", "speed", "progress",
})
_STREAM_KEY = re.compile(r"stream_\d+_\d+_\w+")


def is_progress_line(line: str) -> bool:
    """True for a -progress key=value line, False for ordinary log output."""
    key, sep, _ = line.strip().partition("=")
    if not sep:
        return False
    return key in PROGRESS_KEYS or _STREAM_KEY.fullmatch(key) is not None


def parse_clock(text: str) -> float | None:
    """Parse 'HH:MM:SS.ff' into seconds. Returns None when malformed."""
    parts = text.strip().split(":")
    if len(parts) != 3:
        return None
    try:
        h, m, s = (float(p) for p in parts)
    except ValueError:
        return None
    return h * 3600 + m * 60 + s


def parse_out_time(line: str) -> float | None:
    """Return the encoded position in seconds from one progress line."""
    key, sep, value = line.strip().partition("=")
    if not sep:
        return None
    if key in ("out_time_us", "out_time_ms"):
        try:
            return int(value) / 1_000_000
        except ValueError:
            return None
    if key == "out_time":
        return parse_clock(value)
    return None


def progress_fraction(line: str, expected_duration: float | None) -> float | None:
    """Fraction of expected_duration encoded so far, clamped to [0, 1].

    None when the line carries no position or no duration is known.
    """
    if not expected_duration or expected_duration <= 0:
        return None
    seconds = parse_out_time(line)
    if seconds is None:
        return None
    return min(1.0, max(0.0, seconds / expected_duration))


class ProgressPrinter:
    """on_line callback that prints whole-percent progress changes."""

    def __init__(self, expected_duration: float | None, label: str = "Encoding"):
        self.expected_duration = expected_duration
        self.label = label
        self.last_percent = -1

    def __call__(self, line: str) -> None:
        fraction = progress_fraction(line, self.expected_duration)
        if fraction is None:
            return
        percent = int(fraction * 100)
        if percent > self.last_percent:
            self.last_percent = percent
            print(f"\r  {self.label}: {percent:3d}%", end="", flush=True)
            if percent == 100:
                print()
