"""Shared test fixtures for slidecast tests."""

import subprocess
from pathlib import Path

import numpy as np
import pytest
import imageio_ffmpeg
from PIL import Image

from slidecast.runner import ProcessResult

_FFMPEG = imageio_ffmpeg.get_ffmpeg_exe()


def _lavfi_video(out, color, duration, audio):
    cmd = [
        _FFMPEG, "-y",
        "-f", "lavfi", "-i", f"color=c={color}:s=320x240:d={duration}:r=10",
    ]
    if audio:
        cmd += ["-f", "lavfi", "-i", "anullsrc=r=44100:cl=mono", "-shortest"]
    cmd += ["-c:v", "libx264", "-crf", "28", "-pix_fmt", "yuv420p"]
    if audio:
        cmd += ["-c:a", "aac", "-b:a", "32k"]
    cmd.append(str(out))
    subprocess.run(cmd, check=True, capture_output=True)
    return out


@pytest.fixture
def ffmpeg_exe():
    return _FFMPEG


@pytest.fixture
def source_video(tmp_path):
    """5-second 320x240 10fps recording with an audio track."""
    return _lavfi_video(tmp_path / "recording.mp4", "blue", 5, audio=True)


@pytest.fixture
def deck_video(tmp_path):
    """3-second 320x240 slide video without audio."""
    return _lavfi_video(tmp_path / "deck.mp4", "red", 3, audio=False)


def write_slide_images(frames_dir, count, size=(320, 240)):
    """Write `count` solid-color NNNNN.png slides, return their paths."""
    frames_dir = Path(frames_dir)
    frames_dir.mkdir(parents=True, exist_ok=True)
    colors = [(200, 40, 40), (40, 200, 40), (40, 40, 200), (220, 220, 220)]
    paths = []
    for i in range(count):
        frame = np.full((size[1], size[0], 3), colors[i % len(colors)], dtype=np.uint8)
        path = frames_dir / f"{i:05d}.png"
        Image.fromarray(frame).save(path)
        paths.append(path)
    return paths


@pytest.fixture
def slide_frames(tmp_path):
    """Frames directory with two slide images."""
    frames_dir = tmp_path / "frames"
    write_slide_images(frames_dir, 2)
    return frames_dir


class FakeRunner:
    """Records every invocation instead of running ffmpeg.

    `results` are returned in order; once exhausted every call succeeds.
    """

    def __init__(self, results=None):
        self.calls = []
        self.results = list(results or [])

    def __call__(self, binary, args, on_line=None):
        argv = args.to_list()
        self.calls.append((binary, argv))
        if on_line is not None:
            on_line("out_time_ms=1000000")
        if self.results:
            return self.results.pop(0)
        return ProcessResult(0, "")

    @property
    def argvs(self):
        return [argv for _, argv in self.calls]


@pytest.fixture
def fake_runner():
    return FakeRunner()
