"""
pic4pdf — Layout engine.

Computes where an image goes on a page and, when it overflows the page,
which pixels stay visible. Every function here is pure: the same inputs
always give the same output.

Image pixels count as points (72 DPI), so an image of N pixels is
N / unit working units long.
"""

from __future__ import annotations

from pic4pdf.errors import InvalidGeometryError, UnsupportedModeError
from pic4pdf.models.layout import CropRect, ImageOptions, Mode, Placement, RenderResult
from pic4pdf.models.page import PageSize, Unit, resolve_unit
from pic4pdf.utils.logging import logger

# relative slack for edges that touch the page exactly
_EDGE_TOLERANCE = 1e-9


def _check_pixels(width_px: int, height_px: int) -> None:
    if width_px <= 0 or height_px <= 0:
        raise InvalidGeometryError("Image", width_px, height_px)


def layout(
    page_size: PageSize,
    unit: Unit,
    width_px: int,
    height_px: int,
    options: ImageOptions | None = None,
) -> Placement:
    """
    Place an image of ``width_px`` x ``height_px`` pixels on the page.

    Returns the position and size in ``unit``. The image is always
    centered; x and y go negative when it is larger than the page.
    """
    _check_pixels(width_px, height_px)
    options = options or ImageOptions()
    unit = resolve_unit(unit)

    page = page_size.normalize(unit)
    pg_w, pg_h = page.w, page.h

    f = float(unit)
    img_w = width_px / f
    img_h = height_px / f

    if options.mode is Mode.CENTER:
        w, h = img_w, img_h
    elif options.mode is Mode.FIT:
        if img_w / img_h > pg_w / pg_h:
            w, h = pg_w, pg_w * img_h / img_w
        else:
            w, h = pg_h * img_w / img_h, pg_h
    elif options.mode is Mode.FILL:
        if img_w / img_h < pg_w / pg_h:
            w, h = pg_w, pg_w * img_h / img_w
        else:
            w, h = pg_h * img_w / img_h, pg_h
    else:
        raise UnsupportedModeError(options.mode)

    # no re-clamping: a scaled Fit may overflow, a scaled Fill may not cover
    w *= options.effective_scale
    h *= options.effective_scale

    x, y = pg_w / 2 - w / 2, pg_h / 2 - h / 2
    return Placement(x=x, y=y, w=w, h=h)


def _crop_from_placement(
    page: PageSize, placement: Placement, width_px: int, height_px: int
) -> CropRect:
    px_w = placement.w / width_px
    px_h = placement.h / height_px

    img_x1 = placement.x / px_w
    img_y1 = placement.y / px_h
    img_x2 = img_x1 + width_px
    img_y2 = img_y1 + height_px

    page_w_px = page.w / px_w
    page_h_px = page.h / px_h

    x1, x2, crop_x = _visible_span(img_x1, img_x2, page_w_px, width_px)
    y1, y2, crop_y = _visible_span(img_y1, img_y2, page_h_px, height_px)
    return CropRect(x1=x1, y1=y1, x2=x2, y2=y2, must_crop=crop_x or crop_y)


def _visible_span(
    start: float, end: float, page_px: float, size_px: int
) -> tuple[int, int, bool]:
    """Pixel range of one axis left on the page, and whether it was cut."""
    # an edge that lands on the page border only misses it by rounding
    tolerance = _EDGE_TOLERANCE * size_px
    lo, hi, cut = 0, size_px, False
    # int() truncates toward zero, which may drop one extra pixel
    if start < -tolerance:
        lo = int(-start)
        cut = True
    if end > page_px + start + tolerance:
        hi = int(page_px - start)
        cut = True
    if hi <= lo:
        # page narrower than one pixel: keep the pixel under it
        lo = min(lo, size_px - 1)
        hi = lo + 1
    return lo, hi, cut


def crop_rect(
    page_size: PageSize,
    unit: Unit,
    width_px: int,
    height_px: int,
    options: ImageOptions | None = None,
) -> CropRect:
    """Pixel rectangle of the image left visible by the page."""
    return render(page_size, unit, width_px, height_px, options).crop


def render(
    page_size: PageSize,
    unit: Unit,
    width_px: int,
    height_px: int,
    options: ImageOptions | None = None,
) -> RenderResult:
    """Compute placement and crop together."""
    placement = layout(page_size, unit, width_px, height_px, options)
    page = page_size.normalize(resolve_unit(unit))
    crop = _crop_from_placement(page, placement, width_px, height_px)

    px_w = placement.w / width_px
    px_h = placement.h / height_px
    visible = Placement(
        x=placement.x + crop.x1 * px_w,
        y=placement.y + crop.y1 * px_h,
        w=crop.width * px_w,
        h=crop.height * px_h,
    )

    logger.debug(
        "layout %dx%d px → (%.2f, %.2f, %.2f, %.2f) crop=%s",
        width_px, height_px, placement.x, placement.y, placement.w, placement.h,
        (crop.x1, crop.y1, crop.x2, crop.y2) if crop.must_crop else "none",
    )
    return RenderResult(placement=placement, crop=crop, visible=visible)
