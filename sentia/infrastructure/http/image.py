"""Conversion of local image references into a transmittable payload."""

import asyncio
import base64
import logging
from pathlib import Path
from typing import Union

from sentia.exceptions import InvalidImageError

logger = logging.getLogger(__name__)

ImageRef = Union[bytes, bytearray, str, Path]


def _read_image_bytes(image: ImageRef) -> bytes:
    if isinstance(image, (bytes, bytearray)):
        return bytes(image)
    path = Path(image)
    try:
        return path.read_bytes()
    except OSError as e:
        raise InvalidImageError(f"Cannot read image at {path}: {e}") from e


async def encode_image(image: ImageRef, max_size_bytes: int) -> str:
    """Read an image reference and return its base64 encoding.

    Args:
        image: Raw bytes or a path to a local image file.
        max_size_bytes: Ceiling on the image file size.

    Returns:
        Base64 text without any ``data:`` prefix.

    Raises:
        InvalidImageError: If the image is missing, unreadable, empty or too large.
    """
    if image is None:
        raise InvalidImageError("No image supplied")

    if isinstance(image, (bytes, bytearray)):
        data = bytes(image)
    else:
        data = await asyncio.to_thread(_read_image_bytes, image)

    if not data:
        raise InvalidImageError("Image is empty")

    size_mb = len(data) / (1024 * 1024)
    if len(data) > max_size_bytes:
        logger.warning(
            "Rejected oversized image: %.2fMB (max %.2fMB)",
            size_mb,
            max_size_bytes / (1024 * 1024),
        )
        raise InvalidImageError(
            f"Image too large: {size_mb:.2f}MB",
            too_large=True,
            details={"size_mb": round(size_mb, 2)},
        )

    return base64.b64encode(data).decode("ascii")
