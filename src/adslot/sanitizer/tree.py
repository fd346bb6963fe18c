"""Structural sanitizer: enforce the policy on a parsed tree, in place."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, NavigableString, Tag

from adslot.sanitizer.parser import fragment_root
from adslot.sanitizer.policy import AD_POLICY, Policy

DANGEROUS_SCHEMES = ("javascript:", "data:", "vbscript:")

_SAFE_URL_RE = re.compile(r"(?:https?://|\.?/|[A-Za-z0-9])")

# Browsers ignore these inside a scheme: "java\tscript:" still runs.
_URL_NOISE_RE = re.compile(r"[\x00-\x20\x7f]+")


def is_safe_url(value: str) -> bool:
    """Return True if ``value`` may stay in an ``href``/``src`` attribute.

    Accepted after trimming leading whitespace: ``http://``, ``https://``,
    ``/``, ``./``, or a leading ASCII letter or digit (bare relative path).
    A ``javascript:``, ``data:`` or ``vbscript:`` prefix is rejected even when
    the value also matches an accepted form.
    """
    candidate = value.lstrip()
    folded = _URL_NOISE_RE.sub("", candidate).lower()
    if folded.startswith(DANGEROUS_SCHEMES):
        return False
    return _SAFE_URL_RE.match(candidate) is not None


def _sanitize_attributes(tag: Tag, policy: Policy) -> None:
    for name in list(tag.attrs):
        value = tag.attrs[name]
        if not policy.allows_attribute(tag.name, name):
            del tag.attrs[name]
        elif policy.is_url_attribute(name) and not is_safe_url(str(value)):
            del tag.attrs[name]


def sanitize_tree(tree: BeautifulSoup, policy: Policy = AD_POLICY) -> BeautifulSoup:
    """Apply ``policy`` to every node under the synthetic root.

    Disallowed elements are removed together with their whole subtree. This
    is a delete, not an unwrap: anything that reaches this point with a
    disallowed tag is treated as hostile. Non-text strings (comments,
    doctypes, CDATA, processing instructions) are removed as well.

    The walk uses an explicit stack so deeply nested input cannot exhaust
    the interpreter's recursion limit. Returns the same tree.
    """
    stack: list[Tag] = [fragment_root(tree)]
    while stack:
        parent = stack.pop()
        for child in list(parent.children):
            if isinstance(child, Tag):
                if not policy.allows_tag(child.name):
                    child.decompose()
                    continue
                _sanitize_attributes(child, policy)
                stack.append(child)
            elif type(child) is not NavigableString:
                child.extract()
    return tree
