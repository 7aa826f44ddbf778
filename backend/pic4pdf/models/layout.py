"""
pic4pdf — Placement options and layout results.

All values are short-lived: they are produced per placement call and
never mutated.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict


class Mode(str, enum.Enum):
    CENTER = "center"  # keep the image size
    FIT = "fit"  # largest size fully inside the page
    FILL = "fill"  # smallest size covering the page, may overflow


class ImageOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: Mode = Mode.CENTER
    scale: float | None = None
    crop: bool = False

    @property
    def effective_scale(self) -> float:
        """Scale factor to apply; absent or non-positive means none."""
        if self.scale is not None and self.scale > 0:
            return self.scale
        return 1.0


class Placement(BaseModel):
    """On-page position and size, in the working unit."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    w: float
    h: float


class CropRect(BaseModel):
    """Visible part of the image, in image pixels."""

    model_config = ConfigDict(frozen=True)

    x1: int
    y1: int
    x2: int
    y2: int
    must_crop: bool = False

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1


class RenderResult(BaseModel):
    """Placement, crop and the on-page rectangle of the cropped image."""

    model_config = ConfigDict(frozen=True)

    placement: Placement
    crop: CropRect
    visible: Placement
