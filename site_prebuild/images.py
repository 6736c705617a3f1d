"""Image transcoding utilities."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Optional

import filetype
from PIL import Image

logger = logging.getLogger("site_prebuild")

WEBP_SUFFIX = ".webp"


def sniff_image_mime(source: Path) -> Optional[str]:
    """Return the image MIME type from the file signature, or ``None``."""
    kind = filetype.guess(str(source))
    if kind and kind.mime.startswith("image/"):
        return kind.mime
    return None


def webp_relative_path(relative_path: str) -> str:
    """Swap the extension of a ``/``-separated path for ``.webp``."""
    return PurePosixPath(relative_path).with_suffix(WEBP_SUFFIX).as_posix()


def transcode_to_webp(source: Path, target: Path, quality: int) -> None:
    """Re-encode ``source`` as a WebP image at ``target``.

    Raises :class:`ValueError` when the file carries no image signature.
    """
    mime = sniff_image_mime(source)
    if mime is None:
        raise ValueError(f"{source.name} is not an image")
    logger.debug("Transcoding %s (%s) to WebP", source, mime)

    with Image.open(source) as image:
        converted = image
        if image.mode not in ("RGB", "RGBA"):
            converted = image.convert("RGBA" if image.has_transparency_data else "RGB")
        converted.save(target, format="WEBP", quality=quality)
