"""
pic4pdf — Image decoding.

Wraps a PyMuPDF pixmap together with the original bytes and a format
hint. The layout engine only needs the pixel size; the alpha channel
decides how a decoded image is re-encoded for embedding (PNG keeps
transparency, JPEG is used otherwise).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import fitz

from pic4pdf.errors import ImageDecodeError, ImageNotFoundError, UnsupportedImageTypeError

SUPPORTED_TYPES = {"png", "jpeg", "gif", "bmp", "tiff"}

_ALIASES = {
    "jpg": "jpeg",
    "jpe": "jpeg",
    "tif": "tiff",
}


def normalize_filetype(hint: str) -> str:
    """Turn an extension (".JPG") or MIME type ("image/jpeg") into a type name."""
    ft = (hint or "").strip().lower()
    if "/" in ft:
        ft = ft.split("/", 1)[1]
    ft = ft.lstrip(".")
    ft = _ALIASES.get(ft, ft)
    if ft not in SUPPORTED_TYPES:
        raise UnsupportedImageTypeError(hint)
    return ft


def _as_embeddable(pix: fitz.Pixmap) -> fitz.Pixmap:
    # PNG and pixmap copies only handle gray and RGB
    if pix.colorspace is not None and pix.colorspace.n not in (1, 3):
        return fitz.Pixmap(fitz.csRGB, pix)
    return pix


@dataclass
class ImageSource:
    pixmap: fitz.Pixmap
    filetype: str
    data: bytes | None = None  # original bytes, embedded as-is when present

    @classmethod
    def from_bytes(cls, data: bytes, filetype: str) -> ImageSource:
        ft = normalize_filetype(filetype)
        try:
            pix = fitz.Pixmap(data)
        except Exception as exc:
            raise ImageDecodeError(ft, str(exc)) from exc
        return cls(pixmap=pix, filetype=ft, data=bytes(data))

    @classmethod
    def from_file(cls, path: str | Path) -> ImageSource:
        p = Path(path)
        if not p.is_file():
            raise ImageNotFoundError(str(path))
        return cls.from_bytes(p.read_bytes(), p.suffix)

    @classmethod
    def from_pixmap(cls, pixmap: fitz.Pixmap) -> ImageSource:
        return cls(pixmap=pixmap, filetype="png" if pixmap.alpha else "jpeg")

    @property
    def width(self) -> int:
        return self.pixmap.width

    @property
    def height(self) -> int:
        return self.pixmap.height

    @property
    def has_alpha(self) -> bool:
        return bool(self.pixmap.alpha)

    def encode(self, jpeg_quality: int = 95) -> tuple[str, bytes]:
        """Return ``(content_type, bytes)`` ready for the document writer."""
        if self.data is not None:
            return self.filetype, self.data
        pix = _as_embeddable(self.pixmap)
        if pix.alpha:
            return "png", pix.tobytes("png")
        return "jpeg", pix.tobytes("jpeg", jpg_quality=jpeg_quality)

    def crop(self, x1: int, y1: int, x2: int, y2: int) -> ImageSource:
        """Copy of the pixel rectangle ``[x1, x2) x [y1, y2)``."""
        pix = _as_embeddable(self.pixmap)
        irect = fitz.IRect(x1, y1, x2, y2)
        out = fitz.Pixmap(pix.colorspace, irect, pix.alpha)
        out.copy(pix, irect)
        return ImageSource.from_pixmap(out)
