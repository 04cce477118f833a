"""Exception taxonomy.

ValidationError subclasses are raised before any ffmpeg process starts.
EncodeError subclasses are raised by the pipeline once work has begun;
files already written are left on disk.
"""

# Lines of ffmpeg stderr quoted in error messages.
STDERR_TAIL_LINES = 10


def stderr_tail(text: str | None) -> str:
    if not text:
        return ""
    lines = text.strip().splitlines()[-STDERR_TAIL_LINES:]
    return "\n".join(f"    {line}" for line in lines)


class SlidecastError(Exception):
    """Base exception for slidecast."""


# ── Request validation ────────────────────────────────────────────


class ValidationError(SlidecastError, ValueError):
    """Composition request rejected before any command was built."""


class OverlayWidthOutOfRange(ValidationError):
    def __init__(self, value: float, low: float = 0.05, high: float = 0.5):
        self.value = value
        super().__init__(
            f"overlay_relative_width must be within [{low}, {high}], got {value}"
        )


class EmptyTimings(ValidationError):
    def __init__(self):
        super().__init__("timings must not be empty")


class InvalidSlideIndices(ValidationError):
    def __init__(self, position: int, found: int):
        self.position = position
        self.found = found
        super().__init__(
            "slide indices must start at 0 and be contiguous: "
            f"position {position} has slide_index {found}"
        )


class NonIncreasingTimings(ValidationError):
    def __init__(self, position: int, current: float, following: float):
        self.position = position
        super().__init__(
            "timings must be strictly increasing: "
            f"slide {position} at {current}s is not before "
            f"slide {position + 1} at {following}s"
        )


# ── Encoding pipeline ─────────────────────────────────────────────


class EncodeError(SlidecastError, RuntimeError):
    """An ffmpeg step could not be started or did not succeed."""


class ProcessInvocationFailed(EncodeError):
    def __init__(self, binary: str, cause: OSError):
        self.binary = binary
        self.cause = cause
        super().__init__(f"could not start encoder '{binary}': {cause}")


class MissingSlideImage(EncodeError):
    def __init__(self, index: int, path):
        self.index = index
        self.path = str(path)
        super().__init__(f"missing slide image {index}: {self.path}")


class SegmentEncodeFailed(EncodeError):
    def __init__(self, index: int, status: int, stderr: str = ""):
        self.index = index
        self.status = status
        self.stderr = stderr
        msg = f"ffmpeg failed creating segment {index} (exit status {status})"
        if tail := stderr_tail(stderr):
            msg += f"\n{tail}"
        super().__init__(msg)


class ConcatenationFailed(EncodeError):
    def __init__(self, status: int, stderr: str = ""):
        self.status = status
        self.stderr = stderr
        msg = f"ffmpeg concat failed (exit status {status})"
        if tail := stderr_tail(stderr):
            msg += f"\n{tail}"
        super().__init__(msg)


class CompositionFailed(EncodeError):
    def __init__(self, status: int, stderr: str = ""):
        self.status = status
        self.stderr = stderr
        msg = f"ffmpeg composition failed (exit status {status})"
        if tail := stderr_tail(stderr):
            msg += f"\n{tail}"
        super().__init__(msg)
