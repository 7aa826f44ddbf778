"""
pic4pdf — Structured error catalog.

Every error has a code, human message, and suggested fix.
Geometry errors are contract violations and are raised immediately;
collaborator errors (files, decoding, writing) are wrapped once and
propagated unchanged.
"""

from __future__ import annotations

from typing import Any


class Pic4PdfError(Exception):
    """Base error with structured code + suggestion."""

    def __init__(self, code: str, message: str, suggestion: str = "", detail: Any = None):
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "error_code": self.code,
            "message": self.message,
        }
        if self.suggestion:
            d["suggestion"] = self.suggestion
        if self.detail:
            d["detail"] = self.detail
        return d


class InvalidGeometryError(Pic4PdfError):
    def __init__(self, what: str, width: float, height: float):
        super().__init__(
            code="INVALID_GEOMETRY",
            message=f"{what} must have positive dimensions, got {width}x{height}",
            suggestion="Width and height must both be greater than zero.",
            detail={"width": width, "height": height},
        )


class UnsupportedUnitError(Pic4PdfError):
    def __init__(self, unit: Any):
        super().__init__(
            code="UNSUPPORTED_UNIT",
            message=f"Unsupported unit: {unit!r}",
            suggestion="Use one of: pt, mm, cm, in.",
        )


class UnsupportedModeError(Pic4PdfError):
    def __init__(self, mode: Any):
        super().__init__(
            code="UNSUPPORTED_MODE",
            message=f"Unsupported placement mode: {mode!r}",
            suggestion="Use one of: center, fit, fill.",
        )


class UnknownPageSizeError(Pic4PdfError):
    def __init__(self, name: str, known: list[str]):
        super().__init__(
            code="UNKNOWN_PAGE_SIZE",
            message=f"Unknown page size: {name}",
            suggestion=f"Known page sizes: {', '.join(known)}.",
        )


class ImageNotFoundError(Pic4PdfError):
    def __init__(self, path: str):
        super().__init__(
            code="IMAGE_NOT_FOUND",
            message=f"Image file not found: {path}",
            suggestion="Check the path and make sure the file is readable.",
        )


class UnsupportedImageTypeError(Pic4PdfError):
    def __init__(self, filetype: str):
        super().__init__(
            code="IMAGE_TYPE_UNSUPPORTED",
            message=f"Image type not supported: {filetype or '(none)'}",
            suggestion="Supported types: png, jpg, jpeg, gif, bmp, tif, tiff, webp.",
        )


class ImageDecodeError(Pic4PdfError):
    def __init__(self, filetype: str, message: str):
        super().__init__(
            code="IMAGE_DECODE_FAILED",
            message=f"Could not decode {filetype} image: {message}",
            suggestion="Make sure the file is a valid image of the declared type.",
        )


class DocumentWriteError(Pic4PdfError):
    def __init__(self, target: str, message: str):
        super().__init__(
            code="DOCUMENT_WRITE_FAILED",
            message=f"Could not write PDF to {target}: {message}",
            suggestion="Check that the output location is writable.",
        )
