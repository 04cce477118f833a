"""slidecast.common: shared path helpers.

Contains: ${var} path substitution for manifests and per-job work
directory allocation.
"""

import re
import tempfile
from pathlib import Path


# ── Path utilities ─────────────────────────────────────────────────

def resolve_path_vars(text: str, paths: dict[str, str]) -> str:
    """Replace ${name} variables in a string using the paths dict."""
    def _replace(match):
        key = match.group(1)
        if key not in paths:
            raise ValueError(f"Unknown path variable: ${{{key}}}")
        return str(paths[key])
    return re.sub(r"\$\{(\w+)\}", _replace, text)


# ── Work directories ───────────────────────────────────────────────

def make_work_dir(prefix: str = "slidecast", parent: str | Path | None = None) -> Path:
    """Create a fresh, uniquely named directory for one job.

    Concurrent jobs must not share segment or frame directories; each
    call returns a directory no other call has returned.
    """
    if parent is not None:
        Path(parent).mkdir(parents=True, exist_ok=True)
    return Path(tempfile.mkdtemp(prefix=f"{prefix}-", dir=parent))
