"""
pic4pdf — Image to PDF converter.

Puts one image per page. Geometry comes from the layout engine; this
module only picks the bytes to embed and hands them to the document
builder. With ``ImageOptions.crop`` set, an overflowing image is cut
down to its visible pixels before embedding, so the PDF does not carry
data that can never be seen.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pic4pdf.core.config import settings
from pic4pdf.layout.engine import layout, render
from pic4pdf.models.layout import ImageOptions, Placement
from pic4pdf.models.page import A4, PageSize, Unit, resolve_unit
from pic4pdf.pdf.document import DocumentBuilder, PlacedImage
from pic4pdf.pdf.image_source import ImageSource
from pic4pdf.utils.logging import logger, step_timer


class PdfGenerator:
    """
    Builds a PDF with one image per page.

    All geometry is in ``unit``; ``page_size`` is rescaled to it when it
    is a point-based standard size.
    """

    def __init__(
        self,
        page_size: PageSize = A4,
        unit: Unit = Unit.POINT,
        jpeg_quality: int | None = None,
    ):
        self._builder = DocumentBuilder(unit, page_size)
        self._source_size = page_size
        self.jpeg_quality = jpeg_quality or settings.jpeg_quality

    def __enter__(self) -> PdfGenerator:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def unit(self) -> Unit:
        return self._builder.unit

    @property
    def page_count(self) -> int:
        return self._builder.page_count

    @property
    def placements(self) -> list[PlacedImage]:
        return self._builder.placements

    def page_size(self) -> tuple[float, float]:
        """Page size in the generator's unit."""
        size = self._builder.page_size
        return size.w, size.h

    def calc_image_layout(
        self, width_px: int, height_px: int, options: ImageOptions | None = None
    ) -> Placement:
        return layout(self._source_size, self.unit, width_px, height_px, options)

    def add_image(self, source: ImageSource, options: ImageOptions | None = None) -> str:
        options = options or ImageOptions()
        result = render(self._source_size, self.unit, source.width, source.height, options)

        target = result.placement
        if options.crop and result.crop.must_crop:
            crop = result.crop
            source = source.crop(crop.x1, crop.y1, crop.x2, crop.y2)
            target = result.visible
            logger.info(
                "  Cropped %s image to (%d, %d, %d, %d)",
                options.mode.value, crop.x1, crop.y1, crop.x2, crop.y2,
            )

        content_type, data = source.encode(self.jpeg_quality)
        return self._builder.add_image(data, content_type, target.x, target.y, target.w, target.h)

    def add_image_file(self, path: str | Path, options: ImageOptions | None = None) -> str:
        return self.add_image(ImageSource.from_file(path), options)

    def add_image_bytes(
        self, data: bytes, filetype: str, options: ImageOptions | None = None
    ) -> str:
        return self.add_image(ImageSource.from_bytes(data, filetype), options)

    def to_bytes(self) -> bytes:
        return self._builder.to_bytes()

    def write(self, stream: BinaryIO) -> None:
        self._builder.write(stream)

    def write_file(self, path: str | Path) -> None:
        self._builder.write_file(path)

    def close(self) -> None:
        self._builder.close()


async def images_to_pdf(
    image_list: list[tuple[bytes, str]],
    page_size: PageSize = A4,
    unit: Unit = Unit.POINT,
    options: ImageOptions | None = None,
) -> bytes:
    """
    Convert ``(bytes, filetype)`` pairs into a single PDF.

    Each image is placed on its own page with the same options.
    Returns the raw PDF bytes.
    """
    options = options or ImageOptions()
    with step_timer(
        "Convert images → PDF",
        images=len(image_list),
        page=f"{page_size.w:g}x{page_size.h:g}",
        unit=resolve_unit(unit).symbol,
        mode=options.mode.value,
        scale=options.scale,
    ):
        with PdfGenerator(page_size, unit) as gen:
            for data, filetype in image_list:
                gen.add_image_bytes(data, filetype, options)
            pdf_bytes = gen.to_bytes()

        logger.info("  Created %d-page PDF (%d bytes)", len(image_list), len(pdf_bytes))
        return pdf_bytes
