"""Write rendered buffers to image files through Pillow."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import ConfigurationError, EncodingError
from .renderer import ImageBuffer

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "png"


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def resolve_image_format(path: Path | str, image_format: str | None = None) -> tuple[Path, str]:
    """Return the destination path and the file extension to encode with.

    A path without a suffix gets one; a suffix that contradicts an explicit
    ``image_format`` is rejected.
    """

    path = Path(path).expanduser()
    suffix = path.suffix.lower().lstrip(".")
    if image_format:
        image_format = image_format.lower().lstrip(".")
    if not image_format:
        image_format = suffix or DEFAULT_FORMAT

    if not suffix:
        path = path.with_suffix(f".{image_format}")
    elif suffix != image_format:
        raise ConfigurationError(f"destination extension .{suffix} does not match format {image_format}.")
    return path, image_format


def write_image(buffer: ImageBuffer, path: Path | str, image_format: str | None = None) -> Path:
    """Encode ``buffer`` to ``path`` and return the path actually written."""

    output_path, image_format = resolve_image_format(path, image_format)
    pil_format = _pil_format_name(image_format)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        buffer.to_image().save(str(output_path), format=pil_format)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodingError(f"could not write {output_path}: {exc}") from exc
    logger.info("wrote %dx%d %s image to %s", buffer.width, buffer.height, pil_format, output_path)
    return output_path
