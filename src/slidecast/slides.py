"""Slide image storage.

Slides are rendered elsewhere (one PNG per page) and stored here as
NNNNN.png, the zero-padded five-digit index the slideshow pipeline looks
for. Lexicographic and numeric order are the same for these names.
"""

import base64
import binascii
import io
from pathlib import Path

from PIL import Image, UnidentifiedImageError


def slide_filename(index: int) -> str:
    return f"{index:05d}.png"


def slide_image_path(frames_dir: str | Path, index: int) -> Path:
    """Expected location of slide `index` inside frames_dir."""
    return Path(frames_dir) / slide_filename(index)


def save_slide_image(
    output_dir: str | Path, index: int, image_data: bytes | str,
) -> Path:
    """Decode one rendered slide and store it as NNNNN.png.

    Args:
        output_dir: Frames directory (created if needed).
        index: Zero-based slide index.
        image_data: Encoded image bytes, or the same base64-encoded.

    Returns:
        Path of the written PNG.

    Raises:
        ValueError: Negative index, bad base64 or undecodable image data.
    """
    if index < 0:
        raise ValueError(f"Slide index must be >= 0, got {index}")
    if isinstance(image_data, str):
        try:
            image_data = base64.b64decode(image_data, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Slide {index}: invalid base64 image data: {e}") from e

    try:
        img = Image.open(io.BytesIO(image_data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Slide {index}: not a readable image: {e}") from e

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = slide_image_path(out_dir, index)
    img.save(path, format="PNG")
    return path


def list_slide_images(frames_dir: str | Path) -> list[Path]:
    """All NNNNN.png files in frames_dir, in index order."""
    return sorted(
        p for p in Path(frames_dir).glob("*.png")
        if len(p.stem) == 5 and p.stem.isdigit()
    )
