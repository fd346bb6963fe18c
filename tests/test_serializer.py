"""Tests for the fragment serializer."""

from adslot.sanitizer.parser import parse
from adslot.sanitizer.serializer import serialize


def test_void_elements_have_no_self_closing_slash():
    assert serialize(parse("a<br>b")) == "a<br>b"
    assert serialize(parse('<img src="/a.png">')) == '<img src="/a.png">'


def test_trims_surrounding_whitespace():
    assert serialize(parse("  \n<p>x</p>\n  ")) == "<p>x</p>"


def test_escapes_text():
    assert serialize(parse("a &lt; b &amp; c")) == "a &lt; b &amp; c"


def test_keeps_non_ascii_text():
    assert serialize(parse("<p>café ☕</p>")) == "<p>café ☕</p>"


def test_strips_document_wrapper():
    assert serialize(parse("<html><body><p>x</p></body></html>")) == "<p>x</p>"


def test_keeps_node_order():
    assert serialize(parse("<b>1</b>2<i>3</i>")) == "<b>1</b>2<i>3</i>"
