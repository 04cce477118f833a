"""Process runner: executes one ffmpeg command and captures stderr.

Calls block until the process exits. A non-zero exit status is returned,
not raised: callers know which step ran and raise the matching error.
Only a process that cannot be started at all raises here.
"""

import subprocess
from dataclasses import dataclass
from typing import Callable

from .commands import EncoderArgs
from .errors import ProcessInvocationFailed
from .progress import is_progress_line


@dataclass(frozen=True)
class ProcessResult:
    returncode: int
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# Signature of run_process; pipeline steps take any callable with this shape.
Runner = Callable[..., ProcessResult]


def run_process(
    binary: str,
    args: EncoderArgs | list[str],
    on_line: Callable[[str], None] | None = None,
) -> ProcessResult:
    """Run `binary` with `args` and wait for it to finish.

    Args:
        binary: Path or name of the executable.
        args: Argument list (EncoderArgs is flattened here).
        on_line: Called with each stderr line as it arrives, without the
            trailing newline. Used for ffmpeg -progress output.
            Progress key=value lines go only to on_line and are left
            out of the captured stderr, so its tail stays the log.

    Returns:
        ProcessResult with the exit status and the stderr log text.

    Raises:
        ProcessInvocationFailed: The executable could not be started.
    """
    argv = args.to_list() if isinstance(args, EncoderArgs) else list(args)
    cmd = [str(binary), *argv]

    if on_line is None:
        try:
            proc = subprocess.run(
                cmd, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE,
                text=True, errors="replace",
            )
        except OSError as e:
            raise ProcessInvocationFailed(str(binary), e) from e
        return ProcessResult(proc.returncode, proc.stderr or "")

    try:
        proc = subprocess.Popen(
            cmd, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE,
            text=True, errors="replace",
        )
    except OSError as e:
        raise ProcessInvocationFailed(str(binary), e) from e

    captured = []
    with proc:
        for line in proc.stderr:
            if not is_progress_line(line):
                captured.append(line)
            on_line(line.rstrip("\r\n"))
    return ProcessResult(proc.returncode, "".join(captured))
