"""Regex pre-filter applied to raw markup before any structural parsing.

This layer knows nothing about the tree. It deletes the obviously dangerous
fragments so that a confused parser downstream still never sees them:

- ``<script>`` blocks, including everything inside them
- attribute assignments whose value starts with a script-capable URL scheme
- inline ``on*="..."`` event handlers
"""

from __future__ import annotations

import re

_DANGEROUS_SCHEMES = r"(?:javascript|data|vbscript)"

# Nearest closing tag wins. An unterminated block runs to the end of input,
# the same way a browser would swallow the rest of the document.
_SCRIPT_BLOCK_RE = re.compile(
    r"<\s*script\b[^>]*>.*?(?:<\s*/\s*script\s*>|\Z)",
    re.IGNORECASE | re.DOTALL,
)

# A match may take the whitespace run in front of the attribute with it, but
# only from the start of that run. Each run and each name is scanned a bounded
# number of times, so long stretches of whitespace stay linear.
_LEADING_SPACE = r"(?:(?<!\s)\s+)?"

_DANGEROUS_URL_RE = re.compile(
    rf"""{_LEADING_SPACE}(?<![\w:-])[\w:-]+\s*=\s*(?:"\s*{_DANGEROUS_SCHEMES}:[^"]*"|'\s*{_DANGEROUS_SCHEMES}:[^']*'|{_DANGEROUS_SCHEMES}:[^\s>]*)""",
    re.IGNORECASE,
)

_EVENT_HANDLER_RE = re.compile(
    rf"""{_LEADING_SPACE}\bon[a-z]+\s*=\s*(?:"[^"]*"|'[^']*')""",
    re.IGNORECASE,
)


def _strip_once(text: str) -> str:
    text = _SCRIPT_BLOCK_RE.sub("", text)
    text = _DANGEROUS_URL_RE.sub("", text)
    return _EVENT_HANDLER_RE.sub("", text)


def prefilter(raw: str) -> str:
    """Remove script blocks, dangerous URL values and event handlers.

    Substitution repeats until the text stops changing, so fragments split
    around a removed block (``<scr<script></script>ipt>``) cannot reassemble.
    Every round that changes anything makes the string shorter, so the loop
    terminates.
    """
    if not raw:
        return ""
    text = raw
    while True:
        cleaned = _strip_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned
