"""
pic4pdf — Configuration
Loads .env automatically, then reads all settings from environment variables.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from pic4pdf.errors import Pic4PdfError
from pic4pdf.models.layout import Mode
from pic4pdf.models.page import get_page_size, resolve_unit

_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(_env_path)


@dataclass(frozen=True)
class LayoutDefaults:
    """Defaults applied when a request does not name them."""
    page_size: str
    unit: str
    mode: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""
    host: str
    port: int
    debug: bool
    defaults: LayoutDefaults
    max_upload_mb: float
    jpeg_quality: int


def _load_config() -> AppConfig:
    return AppConfig(
        host=os.getenv("APP_HOST", "0.0.0.0"),
        port=int(os.getenv("APP_PORT", "8000")),
        debug=os.getenv("APP_DEBUG", "false").lower() == "true",
        defaults=LayoutDefaults(
            page_size=os.getenv("P4P_PAGE_SIZE", "A4"),
            unit=os.getenv("P4P_UNIT", "pt"),
            mode=os.getenv("P4P_MODE", "fit"),
        ),
        max_upload_mb=float(os.getenv("P4P_MAX_UPLOAD_MB", "10")),
        jpeg_quality=int(os.getenv("P4P_JPEG_QUALITY", "95")),
    )


def _validate_config(cfg: AppConfig) -> None:
    """Fail fast on defaults the layout engine would reject."""
    problems: list[str] = []
    try:
        get_page_size(cfg.defaults.page_size)
    except Pic4PdfError as exc:
        problems.append(f"P4P_PAGE_SIZE: {exc.message}")
    try:
        resolve_unit(cfg.defaults.unit)
    except Pic4PdfError as exc:
        problems.append(f"P4P_UNIT: {exc.message}")
    if cfg.defaults.mode not in {m.value for m in Mode}:
        problems.append(f"P4P_MODE: unsupported mode {cfg.defaults.mode!r}")
    if cfg.max_upload_mb <= 0:
        problems.append("P4P_MAX_UPLOAD_MB must be positive")
    if not 0 < cfg.jpeg_quality <= 100:
        problems.append("P4P_JPEG_QUALITY must be between 1 and 100")
    if problems:
        print(
            "\n  ERROR: Invalid configuration:\n    "
            + "\n    ".join(problems)
            + "\n  Check your environment or backend/.env.\n",
            file=sys.stderr,
        )
        sys.exit(1)


settings = _load_config()
_validate_config(settings)
