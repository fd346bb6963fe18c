"""Tests for text helpers."""

from adslot.utils.text import clean_html, excerpt, truncate


def test_clean_html():
    assert clean_html("<p>Hello&nbsp;<b>there</b></p>\n<br>world") == "Hello there world"
    assert clean_html("") == ""
    assert clean_html(None) == ""


def test_truncate_short_text_unchanged():
    assert truncate("short", 10) == "short"


def test_truncate_breaks_at_word_boundary():
    assert truncate("the quick brown fox jumps", 16) == "the quick..."


def test_truncate_hard_cut_without_late_space():
    assert truncate("abcdefghijklmnop", 10) == "abcdefg..."


def test_excerpt():
    assert excerpt("<div><p>Big <strong>sale</strong> today</p></div>", 100) == "Big sale today"
