"""
pic4pdf — FastAPI Backend

Endpoints:
  POST /v1/layout          — Page + image size → placement and crop geometry
  POST /v1/images-to-pdf   — Image(s) → PDF, one image per page
  GET  /v1/page-sizes      — List standard page sizes
  GET  /health             — Health check
"""

import time
import uuid
from pathlib import Path

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field, model_validator

from pic4pdf.core.config import settings
from pic4pdf.errors import Pic4PdfError
from pic4pdf.layout.engine import render
from pic4pdf.models.layout import ImageOptions, Mode
from pic4pdf.models.page import PageSize, get_page_size, list_page_sizes, resolve_unit
from pic4pdf.utils.logging import logger

VERSION = "1.0.0"

app = FastAPI(
    title="pic4pdf API",
    description="Place images on fixed-size PDF pages (center, fit, fill) with optional cropping.",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-Id", "X-Page-Count"],
)


# ──────────────────────────────────────────────────────────
# Request models
# ──────────────────────────────────────────────────────────

class LayoutRequest(BaseModel):
    width_px: int = Field(..., gt=0, description="Image width in pixels")
    height_px: int = Field(..., gt=0, description="Image height in pixels")
    page_size: str = Field(
        default=settings.defaults.page_size,
        description="Standard page size name (A1-A6, Letter, Legal, Tabloid)",
    )
    page_width: float | None = Field(
        default=None, gt=0, description="Custom page width in `unit`; overrides page_size",
    )
    page_height: float | None = Field(
        default=None, gt=0, description="Custom page height in `unit`; overrides page_size",
    )
    unit: str = Field(default=settings.defaults.unit, description="pt | mm | cm | in")
    landscape: bool = False
    mode: Mode = Mode(settings.defaults.mode)
    scale: float | None = None

    @model_validator(mode="after")
    def _custom_page_needs_both_sides(self) -> "LayoutRequest":
        if (self.page_width is None) != (self.page_height is None):
            raise ValueError("page_width and page_height must be given together")
        return self


def _resolve_page(
    page_size: str,
    landscape: bool,
    page_width: float | None = None,
    page_height: float | None = None,
) -> PageSize:
    if page_width is not None and page_height is not None:
        size = PageSize(w=page_width, h=page_height)
    else:
        size = get_page_size(page_size)
    return size.rotate() if landscape else size


# ──────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────

@app.get("/health")
async def health():
    return {"status": "ok", "service": "pic4pdf-api", "version": VERSION}


@app.get("/v1/page-sizes")
async def get_page_sizes():
    """List standard page sizes, in points."""
    return [entry.model_dump() for entry in list_page_sizes()]


@app.post("/v1/layout")
async def compute_layout(req: LayoutRequest):
    """Return placement (working unit) and crop rectangle (pixels) for one image."""
    try:
        unit = resolve_unit(req.unit)
        page = _resolve_page(req.page_size, req.landscape, req.page_width, req.page_height)
        result = render(
            page, unit, req.width_px, req.height_px,
            ImageOptions(mode=req.mode, scale=req.scale),
        )
    except Pic4PdfError as exc:
        logger.warning("POST /v1/layout — %s", exc.code)
        raise HTTPException(status_code=422, detail=exc.to_dict())

    normalized = page.normalize(unit)
    return {
        "unit": unit.symbol,
        "page": {"w": normalized.w, "h": normalized.h},
        **result.model_dump(),
    }


@app.post(
    "/v1/images-to-pdf",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Generated PDF"},
        413: {"description": "Upload too large"},
        422: {"description": "Invalid options or unsupported image"},
    },
)
async def convert_images(
    files: list[UploadFile] = File(..., description="One or more images"),
    page_size: str = settings.defaults.page_size,
    unit: str = settings.defaults.unit,
    mode: Mode = Mode(settings.defaults.mode),
    scale: float | None = None,
    landscape: bool = False,
    crop: bool = False,
):
    """Convert uploaded images into a single PDF, one image per page."""
    from pic4pdf.pdf.image_to_pdf import images_to_pdf

    request_id = uuid.uuid4().hex[:12]
    start = time.perf_counter()
    logger.info(
        "[%s] POST /v1/images-to-pdf — %d files | page=%s%s unit=%s mode=%s scale=%s crop=%s",
        request_id, len(files), page_size, " (landscape)" if landscape else "",
        unit, mode.value, scale, crop,
    )

    limit = int(settings.max_upload_mb * 1024 * 1024)
    image_list: list[tuple[bytes, str]] = []
    for f in files:
        content = await f.read()
        if len(content) > limit:
            raise HTTPException(
                status_code=413,
                detail=f"File {f.filename} exceeds {settings.max_upload_mb:g}MB limit",
            )
        filetype = Path(f.filename or "").suffix or (f.content_type or "")
        image_list.append((content, filetype))

    try:
        pdf_bytes = await images_to_pdf(
            image_list,
            page_size=_resolve_page(page_size, landscape),
            unit=resolve_unit(unit),
            options=ImageOptions(mode=mode, scale=scale, crop=crop),
        )
    except Pic4PdfError as exc:
        logger.warning("[%s] pic4pdf error: %s", request_id, exc.code)
        raise HTTPException(status_code=422, detail=exc.to_dict())

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("[%s] Complete — %d bytes in %.0f ms", request_id, len(pdf_bytes), elapsed_ms)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": 'attachment; filename="images.pdf"',
            "X-Request-Id": request_id,
            "X-Page-Count": str(len(image_list)),
        },
    )
