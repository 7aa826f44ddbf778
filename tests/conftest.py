"""Shared test configuration and fixtures for the pic4pdf test suite."""

import sys
from pathlib import Path

import fitz
import pytest

# Add backend to Python path so imports work without installing
backend_dir = str(Path(__file__).parent.parent / "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)


def make_image(width: int, height: int, filetype: str = "png", alpha: bool = False) -> bytes:
    """Encode a flat-colored test image."""
    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), alpha)
    pix.clear_with(200)
    return pix.tobytes(filetype)


@pytest.fixture
def png_316x317():
    return make_image(316, 317, "png")


@pytest.fixture
def jpeg_640x480():
    return make_image(640, 480, "jpeg")


@pytest.fixture
def alpha_png_100x50():
    return make_image(100, 50, "png", alpha=True)


@pytest.fixture
def image_dir(tmp_path, png_316x317, jpeg_640x480):
    (tmp_path / "square.png").write_bytes(png_316x317)
    (tmp_path / "photo.jpg").write_bytes(jpeg_640x480)
    (tmp_path / "notes.txt").write_bytes(b"hello world")
    (tmp_path / "broken.png").write_bytes(b"\x89PNG" + b"\0" * 100)
    return tmp_path


@pytest.fixture
def image_factory():
    return make_image
