"""Fail-closed sanitizer for untrusted advertisement markup.

Stages, in order: regex pre-filter, tag allowlist (unwrap), fragment parse,
tree sanitize (delete), serialize.
"""

from adslot.sanitizer.pipeline import Filter, MarkupSanitizer, default_filters, sanitize_ad_markup
from adslot.sanitizer.policy import AD_POLICY, Policy
from adslot.sanitizer.tree import is_safe_url

__all__ = [
    "AD_POLICY",
    "Filter",
    "MarkupSanitizer",
    "Policy",
    "default_filters",
    "is_safe_url",
    "sanitize_ad_markup",
]
