"""Tolerant fragment parser built on BeautifulSoup."""

from __future__ import annotations

import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, Tag

# Short ad snippets such as "http://x.com/a.png" look like URLs to bs4.
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

PARSER_BACKEND = "html.parser"


def parse(text: str) -> BeautifulSoup:
    """Parse a markup fragment into a tree rooted at a synthetic document node.

    ``html.parser`` never fails on malformed input: unclosed tags are closed
    at the end, stray closing tags are ignored, and duplicate attributes keep
    the last value. Tag and attribute names come out lowercase. ``class`` is
    kept as a single string instead of being split into a list.
    """
    return BeautifulSoup(text or "", PARSER_BACKEND, multi_valued_attributes=None)


def fragment_root(tree: BeautifulSoup) -> Tag:
    """Return the node whose children make up the fragment.

    Tree builders that always produce a full document (lxml, html5lib) wrap
    the fragment in ``<html><body>``. ``html.parser`` does not, in which case
    the synthetic root itself holds the fragment.
    """
    html = tree.find("html", recursive=False)
    if html is not None:
        body = html.find("body", recursive=False)
        if body is not None:
            return body
    return tree
