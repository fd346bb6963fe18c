"""Pydantic models for the adslot platform."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AdPosition(str, Enum):
    HEADER = "header"
    SIDEBAR = "sidebar"
    CONTENT_TOP = "content-top"
    CONTENT_MIDDLE = "content-middle"
    CONTENT_BOTTOM = "content-bottom"
    FOOTER = "footer"


POSITION_LABELS: dict[str, str] = {
    "header": "Header Banner",
    "sidebar": "Sidebar",
    "content-top": "Content Top",
    "content-middle": "Content Middle",
    "content-bottom": "Content Bottom",
    "footer": "Footer Banner",
}


# --- Config models ---

class SiteConfig(BaseModel):
    name: str = "adslot"
    base_url: str = "http://localhost:8000"


class SanitizerConfig(BaseModel):
    max_content_length: int = 10_000
    max_passes: int = 3
    # When set, replaces the default ad policy: tag -> allowed attributes.
    allowed_attributes: Optional[dict[str, list[str]]] = None


class AdsConfig(BaseModel):
    positions: list[str] = Field(default_factory=lambda: [p.value for p in AdPosition])
    title_max_length: int = 200


class AppConfig(BaseModel):
    site: SiteConfig = Field(default_factory=SiteConfig)
    sanitizer: SanitizerConfig = Field(default_factory=SanitizerConfig)
    ads: AdsConfig = Field(default_factory=AdsConfig)
    db_path: str = "data/adslot.db"
