# ==============================================================================
# IMAGE UTILITIES - Upload Validation & Compression
# ==============================================================================
# Pillow-based resizing and re-encoding for cat photo uploads
# ==============================================================================

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from typing import Iterable, Optional

from PIL import Image, UnidentifiedImageError

from pawsitiv.core.constants import ErrorMessages, UploadConstants
from pawsitiv.core.exceptions import (
    BadRequestError,
    FileTooLargeError,
    UnsupportedFileTypeError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompressedImage:
    data: bytes
    content_type: str
    width: int
    height: int


def file_extension(filename: Optional[str]) -> str:
    """Lower-cased extension including the dot, '' when missing."""
    return os.path.splitext(filename or "")[1].lower()


def validate_upload(
    filename: Optional[str],
    size: int,
    max_bytes: int,
    allowed: Iterable[str] = UploadConstants.IMAGE_EXTENSIONS,
) -> str:
    """
    Check an upload against the extension allow-list and size limit.

    Returns:
        The normalized extension

    Raises:
        BadRequestError: Empty upload
        UnsupportedFileTypeError: Extension not in ``allowed``
        FileTooLargeError: More than ``max_bytes``
    """
    allowed = set(allowed)
    extension = file_extension(filename)
    if extension not in allowed:
        raise UnsupportedFileTypeError(extension, sorted(allowed))
    if size == 0:
        raise BadRequestError(ErrorMessages.EMPTY_UPLOAD)
    if size > max_bytes:
        raise FileTooLargeError(max_bytes)
    return extension


def _has_alpha(image: Image.Image) -> bool:
    if image.mode in ("RGBA", "LA"):
        return True
    return image.mode == "P" and "transparency" in image.info


def compress_image(
    raw: bytes,
    max_dimension: int = 1280,
    quality: int = 80,
) -> CompressedImage:
    """
    Downscale so the longest side is at most ``max_dimension`` and re-encode.

    Opaque images become JPEG; images with transparency become WebP so the
    alpha channel survives. Animated GIFs keep only their first frame.

    Raises:
        BadRequestError: If Pillow cannot decode the bytes or the pixel
            count exceeds Image.MAX_IMAGE_PIXELS
    """
    try:
        with Image.open(io.BytesIO(raw)) as source:
            source.load()
            image = source.copy()
    except Image.DecompressionBombError as e:
        raise BadRequestError(ErrorMessages.IMAGE_TOO_MANY_PIXELS, details={"reason": str(e)}) from e
    except (UnidentifiedImageError, OSError) as e:
        raise BadRequestError(ErrorMessages.INVALID_IMAGE, details={"reason": str(e)}) from e

    original_size = image.size
    image.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

    buffer = io.BytesIO()
    if _has_alpha(image):
        image.convert("RGBA").save(buffer, format="WEBP", quality=quality, method=4)
        content_type = "image/webp"
    else:
        image.convert("RGB").save(buffer, format="JPEG", quality=quality, optimize=True)
        content_type = "image/jpeg"

    data = buffer.getvalue()
    logger.debug(
        "Compressed image %sx%s -> %sx%s (%d -> %d bytes, %s)",
        original_size[0], original_size[1],
        image.size[0], image.size[1],
        len(raw), len(data), content_type,
    )
    return CompressedImage(
        data=data,
        content_type=content_type,
        width=image.size[0],
        height=image.size[1],
    )
