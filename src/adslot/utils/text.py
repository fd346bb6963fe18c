"""Text formatting helpers."""

from __future__ import annotations

import re
from html import unescape


def clean_html(html: str) -> str:
    """Strip markup tags and decode entities, for plain-text previews."""
    text = re.sub(r"<[^>]+>", " ", html or "")
    return re.sub(r"\s+", " ", unescape(text)).strip()


def truncate(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """Truncate text to max_length, breaking at word boundary."""
    if len(text) <= max_length:
        return text
    truncated = text[: max_length - len(suffix)]
    # Break at last space
    last_space = truncated.rfind(" ")
    if last_space > max_length // 2:
        truncated = truncated[:last_space]
    return truncated + suffix


def excerpt(html: str, max_length: int = 100) -> str:
    """Plain-text excerpt of stored ad markup."""
    return truncate(clean_html(html), max_length)
