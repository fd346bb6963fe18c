"""Tag allowlist pass: unwrap every tag that is not allowed."""

from __future__ import annotations

from collections.abc import Collection

from bs4 import Tag
from bs4.element import PreformattedString

from adslot.sanitizer.parser import parse
from adslot.sanitizer.serializer import serialize


def strip_disallowed_tags(text: str, allowed_tags: Collection[str]) -> str:
    """Drop the markers of disallowed tags while keeping their text in place.

    ``<table><tr><td>Cell</td></tr></table>`` becomes ``Cell``. Comments,
    doctypes and processing instructions are removed. Attributes of retained
    tags pass through untouched, in source order; the tree sanitizer decides
    which of them stay.
    """
    if not text:
        return ""
    allowed = frozenset(t.lower() for t in allowed_tags)
    tree = parse(text)
    for node in list(tree.descendants):
        if isinstance(node, Tag):
            if node.name not in allowed:
                node.unwrap()
        elif isinstance(node, PreformattedString):
            node.extract()
    return serialize(tree)
