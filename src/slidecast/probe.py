"""Media probing: recording duration via moviepy.

imageio-ffmpeg does not bundle ffprobe, so durations are read through
moviepy, which parses ffmpeg's own stream info.
"""

from pathlib import Path

from moviepy import VideoFileClip


def probe_duration(path: str | Path) -> float:
    """Return the duration of a video file in seconds.

    Raises:
        FileNotFoundError: The file does not exist.
        ValueError: The file has no usable duration.
    """
    if not Path(path).exists():
        raise FileNotFoundError(f"Video not found: {path}")
    with VideoFileClip(str(path), audio=False) as clip:
        duration = clip.duration
    if not duration or duration <= 0:
        raise ValueError(f"Could not detect duration of {path}")
    return float(duration)
