"""Encoder configuration: where the ffmpeg binary lives.

Resolution order:
  1. SLIDECAST_FFMPEG environment variable (if non-empty).
  2. ffmpeg_path in the user config file.
  3. The ffmpeg binary bundled with imageio-ffmpeg.

Config file: $XDG_CONFIG_HOME/slidecast/config.yaml
(~/.config/slidecast/config.yaml when XDG_CONFIG_HOME is unset).
  ffmpeg_path: /opt/ffmpeg/bin/ffmpeg
"""

import os
from pathlib import Path

import imageio_ffmpeg
import yaml

FFMPEG_ENV_VAR = "SLIDECAST_FFMPEG"


def config_file_path() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / "slidecast" / "config.yaml"


def load_config(path: str | Path | None = None) -> dict:
    """Read the config file. A missing file is an empty config.

    Raises:
        ValueError: The file exists but is not valid YAML or not a mapping.
    """
    path = Path(path) if path is not None else config_file_path()
    if not path.exists():
        return {}
    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Config file {path}: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path}: expected a mapping, got {type(raw).__name__}")
    return raw


def save_config(config: dict, path: str | Path | None = None) -> Path:
    """Write the config file, creating its directory if needed."""
    path = Path(path) if path is not None else config_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(config, f, default_flow_style=False)
    return path


def get_ffmpeg_path(path: str | Path | None = None) -> str | None:
    """Return the configured ffmpeg path, or None if not set."""
    value = load_config(path).get("ffmpeg_path")
    return str(value) if value else None


def set_ffmpeg_path(ffmpeg_path: str | None, path: str | Path | None = None) -> Path:
    """Persist the ffmpeg path. None removes the setting."""
    config = load_config(path)
    if ffmpeg_path:
        config["ffmpeg_path"] = str(ffmpeg_path)
    else:
        config.pop("ffmpeg_path", None)
    return save_config(config, path)


def resolve_ffmpeg(path: str | Path | None = None) -> str:
    """Return the ffmpeg binary to run, following the resolution order."""
    env_value = os.environ.get(FFMPEG_ENV_VAR, "")
    if env_value:
        return env_value
    configured = get_ffmpeg_path(path)
    if configured:
        return configured
    return imageio_ffmpeg.get_ffmpeg_exe()
