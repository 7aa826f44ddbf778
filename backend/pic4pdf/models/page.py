"""
pic4pdf — Units and page sizes.

The point (1/72 inch) is the base unit. Every other unit is a fixed
number of points, so converting between units is a single ratio.
Standard page sizes are stored in points and rescaled to the working
unit when a document is created.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pic4pdf.errors import UnknownPageSizeError, UnsupportedUnitError


class Unit(float, enum.Enum):
    """Length unit, valued in points per unit."""

    POINT = 1.0
    MILLIMETER = 72.0 / 2.54 / 10
    CENTIMETER = 72.0 / 2.54
    INCH = 72.0

    @property
    def symbol(self) -> str:
        return _UNIT_SYMBOLS[self]


_UNIT_SYMBOLS: dict[Unit, str] = {
    Unit.POINT: "pt",
    Unit.MILLIMETER: "mm",
    Unit.CENTIMETER: "cm",
    Unit.INCH: "in",
}


def resolve_unit(value: Any) -> Unit:
    """Accept a Unit, its symbol ("mm") or its name ("millimeter")."""
    if isinstance(value, Unit):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for unit, symbol in _UNIT_SYMBOLS.items():
            if key in (symbol, unit.name.lower()):
                return unit
    raise UnsupportedUnitError(value)


class PageSize(BaseModel):
    """
    Page width and height.

    When ``unit_is_pt`` is set the values are points regardless of the
    working unit and are rescaled by ``normalize``; otherwise they are
    taken to already be in the working unit.
    """

    model_config = ConfigDict(frozen=True)

    w: float = Field(gt=0)
    h: float = Field(gt=0)
    unit_is_pt: bool = False

    def rotate(self) -> PageSize:
        """Rotate by 90 degrees (portrait <-> landscape)."""
        return PageSize(w=self.h, h=self.w, unit_is_pt=self.unit_is_pt)

    def convert(self, from_unit: Unit, to_unit: Unit) -> PageSize:
        """
        Rescale from one unit to another.

        ``unit_is_pt`` follows the target unit, not the source size: a
        custom size taken pt -> mm -> pt comes back flagged as points,
        since its values are then points. The values round-trip.
        """
        from_unit, to_unit = resolve_unit(from_unit), resolve_unit(to_unit)
        if from_unit is to_unit:
            return self
        ratio = float(from_unit) / float(to_unit)
        return PageSize(
            w=self.w * ratio,
            h=self.h * ratio,
            unit_is_pt=to_unit is Unit.POINT,
        )

    def normalize(self, unit: Unit) -> PageSize:
        """Return this size expressed in the working unit."""
        unit = resolve_unit(unit)
        if self.unit_is_pt:
            f = float(unit)
            return PageSize(w=self.w / f, h=self.h / f, unit_is_pt=unit is Unit.POINT)
        return self


def convert_page_size(size: PageSize, from_unit: Unit, to_unit: Unit) -> PageSize:
    return size.convert(from_unit, to_unit)


def rotate(size: PageSize) -> PageSize:
    return size.rotate()


A1 = PageSize(w=1683.78, h=2383.94, unit_is_pt=True)
A2 = PageSize(w=1190.55, h=1683.78, unit_is_pt=True)
A3 = PageSize(w=841.89, h=1190.55, unit_is_pt=True)
A4 = PageSize(w=595.28, h=841.89, unit_is_pt=True)
A5 = PageSize(w=420.94, h=595.28, unit_is_pt=True)
A6 = PageSize(w=297.64, h=420.94, unit_is_pt=True)
LETTER = PageSize(w=612, h=792, unit_is_pt=True)
LEGAL = PageSize(w=612, h=1008, unit_is_pt=True)
TABLOID = PageSize(w=792, h=1224, unit_is_pt=True)


class PageSizeEntry(BaseModel):
    name: str
    w: float
    h: float


STANDARD_PAGE_SIZES: dict[str, PageSize] = {
    "A1": A1,
    "A2": A2,
    "A3": A3,
    "A4": A4,
    "A5": A5,
    "A6": A6,
    "Letter": LETTER,
    "Legal": LEGAL,
    "Tabloid": TABLOID,
}


def get_page_size(name: str) -> PageSize:
    """Look up a standard page size by name, case-insensitively."""
    for key, size in STANDARD_PAGE_SIZES.items():
        if key.lower() == name.strip().lower():
            return size
    raise UnknownPageSizeError(name, list(STANDARD_PAGE_SIZES))


def list_page_sizes() -> list[PageSizeEntry]:
    return [
        PageSizeEntry(name=name, w=size.w, h=size.h)
        for name, size in STANDARD_PAGE_SIZES.items()
    ]
