"""Unit tests for image decoding, re-encoding and pixel cropping."""

import fitz
import pytest

from pic4pdf.errors import ImageDecodeError, ImageNotFoundError, UnsupportedImageTypeError
from pic4pdf.pdf.image_source import ImageSource, normalize_filetype


class TestNormalizeFiletype:
    @pytest.mark.parametrize("hint,expected", [
        ("png", "png"),
        (".PNG", "png"),
        ("jpg", "jpeg"),
        (".jpeg", "jpeg"),
        ("image/jpeg", "jpeg"),
        ("image/png", "png"),
        ("tif", "tiff"),
        ("GIF", "gif"),
    ])
    def test_known(self, hint, expected):
        assert normalize_filetype(hint) == expected

    @pytest.mark.parametrize("hint", ["", ".exe", "application/pdf", "txt"])
    def test_unknown(self, hint):
        with pytest.raises(UnsupportedImageTypeError):
            normalize_filetype(hint)


class TestImageSource:
    def test_from_bytes_png(self, png_316x317):
        src = ImageSource.from_bytes(png_316x317, "png")
        assert (src.width, src.height) == (316, 317)
        assert src.has_alpha is False
        assert src.filetype == "png"

    def test_from_bytes_jpeg(self, jpeg_640x480):
        src = ImageSource.from_bytes(jpeg_640x480, "image/jpeg")
        assert (src.width, src.height) == (640, 480)

    def test_alpha_detected(self, alpha_png_100x50):
        src = ImageSource.from_bytes(alpha_png_100x50, ".png")
        assert src.has_alpha is True

    def test_raw_bytes_embedded_unchanged(self, jpeg_640x480):
        src = ImageSource.from_bytes(jpeg_640x480, "jpg")
        assert src.encode() == ("jpeg", jpeg_640x480)

    def test_decode_error(self):
        with pytest.raises(ImageDecodeError):
            ImageSource.from_bytes(b"\x89PNG" + b"\0" * 100, "png")

    def test_unsupported_type_before_decoding(self, png_316x317):
        with pytest.raises(UnsupportedImageTypeError):
            ImageSource.from_bytes(png_316x317, "txt")

    def test_from_file(self, image_dir):
        src = ImageSource.from_file(image_dir / "photo.jpg")
        assert (src.width, src.height) == (640, 480)
        assert src.filetype == "jpeg"

    def test_from_file_missing(self, image_dir):
        with pytest.raises(ImageNotFoundError):
            ImageSource.from_file(image_dir / "missing.png")

    def test_from_file_wrong_extension(self, image_dir):
        with pytest.raises(UnsupportedImageTypeError):
            ImageSource.from_file(image_dir / "notes.txt")


class TestEncode:
    def test_opaque_pixmap_becomes_jpeg(self):
        pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, 20, 10), False)
        pix.clear_with(128)
        content_type, data = ImageSource.from_pixmap(pix).encode()
        assert content_type == "jpeg"
        assert data[:2] == b"\xff\xd8"

    def test_alpha_pixmap_becomes_png(self):
        pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, 20, 10), True)
        pix.clear_with(128)
        content_type, data = ImageSource.from_pixmap(pix).encode()
        assert content_type == "png"
        assert data[:4] == b"\x89PNG"


class TestCrop:
    def test_crop_size(self, png_316x317):
        src = ImageSource.from_bytes(png_316x317, "png")
        cropped = src.crop(45, 0, 270, 317)
        assert (cropped.width, cropped.height) == (225, 317)
        # cropped pixels are re-encoded, not passed through
        assert cropped.data is None
        content_type, data = cropped.encode()
        assert content_type == "jpeg"
        assert fitz.Pixmap(data).width == 225

    def test_crop_keeps_alpha(self, alpha_png_100x50):
        src = ImageSource.from_bytes(alpha_png_100x50, "png")
        cropped = src.crop(10, 5, 60, 45)
        assert (cropped.width, cropped.height) == (50, 40)
        assert cropped.has_alpha is True
        assert cropped.encode()[0] == "png"
