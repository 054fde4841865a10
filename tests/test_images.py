# ==============================================================================
# IMAGE UTILITY TESTS
# ==============================================================================

import io

import pytest
from PIL import Image

from pawsitiv.core.constants import ErrorMessages
from pawsitiv.core.exceptions import (
    BadRequestError,
    FileTooLargeError,
    UnsupportedFileTypeError,
)
from pawsitiv.utils.images import compress_image, file_extension, validate_upload


def encode(mode: str, size: tuple, fmt: str = "PNG") -> bytes:
    color = (10, 20, 30, 100) if mode == "RGBA" else (10, 20, 30)
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()


class TestValidateUpload:

    def test_accepts_allowed_extension(self):
        assert validate_upload("Yuna.JPG", 100, 1000) == ".jpg"

    def test_rejects_unknown_extension(self):
        with pytest.raises(UnsupportedFileTypeError) as exc_info:
            validate_upload("virus.exe", 100, 1000)

        assert exc_info.value.status_code == 415
        assert ".png" in exc_info.value.details["allowed"]

    def test_rejects_missing_filename(self):
        with pytest.raises(UnsupportedFileTypeError):
            validate_upload(None, 100, 1000)

    def test_rejects_empty_file(self):
        with pytest.raises(BadRequestError):
            validate_upload("cat.png", 0, 1000)

    def test_rejects_oversized_file(self):
        with pytest.raises(FileTooLargeError) as exc_info:
            validate_upload("cat.png", 1001, 1000)

        assert exc_info.value.status_code == 413

    def test_file_extension(self):
        assert file_extension("a/b/c.WebP") == ".webp"
        assert file_extension("noext") == ""


class TestCompressImage:

    def test_downscales_longest_side(self):
        result = compress_image(encode("RGB", (2000, 1000)), max_dimension=500)

        assert result.content_type == "image/jpeg"
        assert (result.width, result.height) == (500, 250)
        with Image.open(io.BytesIO(result.data)) as decoded:
            assert decoded.size == (500, 250)

    def test_small_image_keeps_size(self):
        result = compress_image(encode("RGB", (40, 30)), max_dimension=500)

        assert (result.width, result.height) == (40, 30)

    def test_transparent_image_becomes_webp(self):
        result = compress_image(encode("RGBA", (64, 64)))

        assert result.content_type == "image/webp"
        with Image.open(io.BytesIO(result.data)) as decoded:
            assert decoded.format == "WEBP"

    def test_gif_becomes_jpeg(self):
        result = compress_image(encode("RGB", (32, 32), fmt="GIF"))

        assert result.content_type == "image/jpeg"

    def test_undecodable_bytes(self):
        with pytest.raises(BadRequestError) as exc_info:
            compress_image(b"not an image at all")

        assert exc_info.value.status_code == 400

    def test_too_many_pixels_is_a_bad_request(self, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

        with pytest.raises(BadRequestError) as exc_info:
            compress_image(encode("RGB", (100, 100)))

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == ErrorMessages.IMAGE_TOO_MANY_PIXELS
