"""Tests for image encoding."""

import base64

import pytest

from sentia.exceptions import InvalidImageError
from sentia.infrastructure.http import encode_image


@pytest.mark.asyncio
async def test_encode_bytes(image):
    """Test encode bytes."""
    encoded = await encode_image(image, 1024)
    assert base64.b64decode(encoded) == image


@pytest.mark.asyncio
async def test_encode_path(tmp_path, image):
    """Test encode path."""
    path = tmp_path / "photo.jpg"
    path.write_bytes(image)
    assert base64.b64decode(await encode_image(path, 1024)) == image
    assert base64.b64decode(await encode_image(str(path), 1024)) == image


@pytest.mark.asyncio
async def test_missing_file_is_invalid(tmp_path):
    """Test missing file is invalid."""
    with pytest.raises(InvalidImageError) as exc_info:
        await encode_image(tmp_path / "missing.jpg", 1024)
    assert exc_info.value.error_code == "INVALID_IMAGE"


@pytest.mark.asyncio
async def test_empty_image_is_invalid():
    """Test empty image is invalid."""
    with pytest.raises(InvalidImageError):
        await encode_image(b"", 1024)


@pytest.mark.asyncio
async def test_oversized_image_is_rejected():
    """Test oversized image is rejected."""
    with pytest.raises(InvalidImageError) as exc_info:
        await encode_image(b"x" * 2048, 1024)
    assert exc_info.value.error_code == "IMAGE_TOO_LARGE"
    assert exc_info.value.http_status == 413
