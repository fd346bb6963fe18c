"""Render a sanitized tree back to a markup fragment."""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from adslot.sanitizer.parser import fragment_root

# Escape &, < and > only; keep non-ASCII text as-is and write void
# elements as <br> rather than <br/>.
FRAGMENT_FORMATTER = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
)


def serialize(tree: BeautifulSoup) -> str:
    """Render the fragment held by ``tree``, without any document wrapper."""
    return fragment_root(tree).decode_contents(formatter=FRAGMENT_FORMATTER).strip()
