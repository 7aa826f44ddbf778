"""
pic4pdf — PDF document builder.

Thin wrapper over a PyMuPDF document: every added image gets its own
page of the configured size. Coordinates come in the working unit and
are converted to points here. Off-page and negative positions are
allowed; the page box clips what does not fit.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

import fitz
from pydantic import BaseModel

from pic4pdf.errors import DocumentWriteError, ImageDecodeError
from pic4pdf.models.page import PageSize, Unit, resolve_unit
from pic4pdf.utils.logging import logger


class PlacedImage(BaseModel):
    name: str
    page: int
    content_type: str
    x: float
    y: float
    w: float
    h: float


class DocumentBuilder:
    """One PDF under construction. Not safe to share between threads."""

    def __init__(self, unit: Unit, page_size: PageSize):
        self.unit = resolve_unit(unit)
        self.page_size = page_size.normalize(self.unit)
        self.placements: list[PlacedImage] = []
        self._doc = fitz.open()
        self._image_index = 0

    def __enter__(self) -> DocumentBuilder:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def page_count(self) -> int:
        return len(self._doc)

    def add_image(
        self,
        image_bytes: bytes,
        content_type: str,
        x: float,
        y: float,
        w: float,
        h: float,
    ) -> str:
        """Append a page showing the image at ``(x, y, w, h)``; return its name."""
        f = float(self.unit)
        page = self._doc.new_page(width=self.page_size.w * f, height=self.page_size.h * f)
        rect = fitz.Rect(x * f, y * f, (x + w) * f, (y + h) * f)
        try:
            page.insert_image(rect, stream=image_bytes, keep_proportion=False)
        except Exception as exc:
            # a failed insert leaves no page behind and does not use up a name
            self._doc.delete_page(page.number)
            raise ImageDecodeError(content_type, str(exc)) from exc

        name = f"p4p_image_{self._image_index}"
        self._image_index += 1

        self.placements.append(
            PlacedImage(
                name=name, page=page.number, content_type=content_type,
                x=x, y=y, w=w, h=h,
            )
        )
        logger.info(
            "  Page %d: %s (%s, %d bytes) at (%.2f, %.2f) size %.2fx%.2f %s",
            page.number + 1, name, content_type, len(image_bytes),
            x, y, w, h, self.unit.symbol,
        )
        return name

    def to_bytes(self) -> bytes:
        if self.page_count == 0:
            raise DocumentWriteError("bytes", "document has no pages")
        return self._doc.tobytes(garbage=3, deflate=True)

    def write(self, stream: BinaryIO) -> None:
        try:
            stream.write(self.to_bytes())
        except OSError as exc:
            raise DocumentWriteError(getattr(stream, "name", "stream"), str(exc)) from exc

    def write_file(self, path: str | Path) -> None:
        try:
            with open(path, "wb") as f:
                f.write(self.to_bytes())
        except OSError as exc:
            raise DocumentWriteError(str(path), str(exc)) from exc
        logger.info("  Wrote %d-page PDF to %s", self.page_count, path)

    def close(self) -> None:
        self._doc.close()
