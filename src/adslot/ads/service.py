"""Ad workflow: validation, the sanitized write paths, activity and click tracking.

``create_ad``, ``update_ad`` and ``resanitize_ads`` are the only functions
that write an ad's ``content``. All of them store sanitizer output, so
anything read back from the ``ads`` table can be emitted into a page
unescaped.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel

from adslot.core.config import build_policy
from adslot.core.models import AppConfig
from adslot.db.repository import Repository
from adslot.sanitizer import MarkupSanitizer, is_safe_url

logger = logging.getLogger(__name__)


class AdError(Exception):
    """Base class for ad workflow errors."""


class AdValidationError(AdError):
    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


class AdNotFoundError(AdError):
    def __init__(self, ad_id: int) -> None:
        super().__init__(f"Advertisement {ad_id} not found")
        self.ad_id = ad_id


class AdInactiveError(AdError):
    def __init__(self, ad_id: int) -> None:
        super().__init__(f"Advertisement {ad_id} is not active")
        self.ad_id = ad_id


class AdForm(BaseModel):
    """Raw ad input as submitted by an admin."""

    title: str = ""
    content: str = ""
    image_url: str = ""
    link_url: str = ""
    position: str = ""
    is_active: bool = True
    start_date: str = ""
    end_date: str = ""


def _is_valid_link(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _parse_date(value: str) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def validate_ad(form: AdForm, config: AppConfig) -> tuple[AdForm, list[str]]:
    """Normalize ``form`` and collect human-readable validation errors.

    The returned form carries sanitized ``content``. The content length is
    checked on the raw input, before the sanitizer ever sees it.
    """
    errors: list[str] = []

    title = form.title.strip()
    position = form.position.strip()
    link_url = form.link_url.strip()
    image_url = form.image_url.strip()
    start = form.start_date.strip()
    end = form.end_date.strip()

    if not title:
        errors.append("Title is required.")
    elif len(title) > config.ads.title_max_length:
        errors.append(f"Title must be at most {config.ads.title_max_length} characters.")

    if not position:
        errors.append("Position is required.")
    elif position not in config.ads.positions:
        errors.append("Invalid position selected.")

    if link_url and not _is_valid_link(link_url):
        errors.append("Please enter a valid URL for the link.")

    if image_url and not is_safe_url(image_url):
        errors.append("Please enter a valid image URL.")

    try:
        start_d, end_d = _parse_date(start), _parse_date(end)
    except ValueError:
        errors.append("Invalid date.")
    else:
        if start_d and end_d and start_d >= end_d:
            errors.append("End date must be after start date.")

    content = ""
    if len(form.content) > config.sanitizer.max_content_length:
        errors.append("Content is too long.")
    else:
        sanitizer = MarkupSanitizer(
            build_policy(config.sanitizer), max_passes=config.sanitizer.max_passes
        )
        content = sanitizer.sanitize(form.content)
        if not image_url and not content:
            errors.append("Please provide either an image or content for the advertisement.")

    cleaned = AdForm(
        title=title,
        content=content,
        image_url=image_url,
        link_url=link_url,
        position=position,
        is_active=form.is_active,
        start_date=start,
        end_date=end,
    )
    return cleaned, errors


def _row_values(form: AdForm) -> dict:
    return {
        "title": form.title,
        "content": form.content,
        "image_url": form.image_url or None,
        "link_url": form.link_url or None,
        "position": form.position,
        "is_active": form.is_active,
        "start_date": form.start_date or None,
        "end_date": form.end_date or None,
    }


def create_ad(repo: Repository, form: AdForm, config: AppConfig) -> int:
    cleaned, errors = validate_ad(form, config)
    if errors:
        raise AdValidationError(errors)
    ad_id = repo.create_ad(**_row_values(cleaned))
    logger.info("Created ad %d in position %s", ad_id, cleaned.position)
    return ad_id


def update_ad(repo: Repository, ad_id: int, form: AdForm, config: AppConfig) -> None:
    if repo.get_ad(ad_id) is None:
        raise AdNotFoundError(ad_id)
    cleaned, errors = validate_ad(form, config)
    if errors:
        raise AdValidationError(errors)
    repo.update_ad(ad_id, **_row_values(cleaned))
    logger.info("Updated ad %d", ad_id)


def resanitize_ads(repo: Repository, config: AppConfig) -> int:
    """Re-run stored content through the current policy. Returns rows changed."""
    sanitizer = MarkupSanitizer(
        build_policy(config.sanitizer), max_passes=config.sanitizer.max_passes
    )
    changed = 0
    for ad in repo.get_ads(limit=-1):
        content = sanitizer.sanitize(ad["content"])
        if content != (ad["content"] or ""):
            repo.update_ad(ad["id"], content=content)
            changed += 1
    if changed:
        logger.info("Re-sanitized %d stored ads", changed)
    return changed


def _as_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def is_ad_active(ad: dict, today: Optional[date] = None) -> bool:
    """True when the ad is enabled and ``today`` falls inside its date window."""
    today = today or date.today()
    if not ad.get("is_active"):
        return False
    start, end = _as_date(ad.get("start_date")), _as_date(ad.get("end_date"))
    if start and start > today:
        return False
    if end and end < today:
        return False
    return True


def get_active_ads(repo: Repository, position: str, today: Optional[date] = None) -> list[dict]:
    today = today or date.today()
    return repo.get_active_ads(position, today.isoformat())


def track_click(repo: Repository, ad_id: int, today: Optional[date] = None) -> int:
    """Count a click on an active ad. Returns the updated click count."""
    ad = repo.get_ad(ad_id)
    if ad is None:
        raise AdNotFoundError(ad_id)
    if not is_ad_active(ad, today):
        raise AdInactiveError(ad_id)
    count = repo.increment_click_count(ad_id)
    if count is None:
        raise AdNotFoundError(ad_id)
    return count
