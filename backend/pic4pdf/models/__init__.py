"""pic4pdf data models — units, page sizes and placement values."""

from pic4pdf.models.page import (
    A1,
    A2,
    A3,
    A4,
    A5,
    A6,
    LEGAL,
    LETTER,
    TABLOID,
    PageSize,
    PageSizeEntry,
    Unit,
    convert_page_size,
    get_page_size,
    list_page_sizes,
    resolve_unit,
    rotate,
)
from pic4pdf.models.layout import (
    CropRect,
    ImageOptions,
    Mode,
    Placement,
    RenderResult,
)

__all__ = [
    "A1",
    "A2",
    "A3",
    "A4",
    "A5",
    "A6",
    "LEGAL",
    "LETTER",
    "TABLOID",
    "PageSize",
    "PageSizeEntry",
    "Unit",
    "convert_page_size",
    "get_page_size",
    "list_page_sizes",
    "resolve_unit",
    "rotate",
    "CropRect",
    "ImageOptions",
    "Mode",
    "Placement",
    "RenderResult",
]
