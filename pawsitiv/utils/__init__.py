"""Utility helpers."""

from pawsitiv.utils.images import (
    CompressedImage,
    compress_image,
    file_extension,
    validate_upload,
)

__all__ = [
    "CompressedImage",
    "compress_image",
    "file_extension",
    "validate_upload",
]
