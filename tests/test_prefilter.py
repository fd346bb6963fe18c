"""Tests for the regex pre-filter stage."""

import time

import pytest

from adslot.sanitizer.prefilter import prefilter


def test_removes_script_block_with_content():
    """Script blocks are deleted together with their text."""
    assert prefilter("a<script>alert(1)</script>b") == "ab"


def test_script_match_is_case_insensitive_and_takes_attributes():
    assert prefilter('x<SCRIPT type="text/javascript">evil()</ScRiPt>y') == "xy"


def test_script_match_is_non_greedy():
    """Text between two script blocks survives."""
    assert prefilter("<script>1</script>keep<script>2</script>") == "keep"


def test_unterminated_script_runs_to_end_of_input():
    assert prefilter("<p>ok</p><script>steal(document.cookie)") == "<p>ok</p>"


def test_split_script_tags_cannot_reassemble():
    """Removing the inner block must not leave a working outer one behind."""
    assert prefilter("<scr<script>x</script>ipt>alert(1)</script>") == ""


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('<a href="javascript:alert(1)">x</a>', "<a>x</a>"),
        ("<a href='JavaScript:alert(1)'>x</a>", "<a>x</a>"),
        ("<a href=javascript:alert(1)>x</a>", "<a>x</a>"),
        ('<a href=" vbscript:msgbox(1)">x</a>', "<a>x</a>"),
        ('<img src="data:text/html;base64,PHNjcmlwdD4=">', "<img>"),
        ('<mi xlink:href="javascript:alert(1)">x</mi>', "<mi>x</mi>"),
    ],
)
def test_removes_dangerous_url_assignments(raw, expected):
    assert prefilter(raw) == expected


def test_keeps_safe_urls():
    raw = '<a href="http://example.com/page" title="data">x</a>'
    assert prefilter(raw) == raw


def test_leaves_plain_text_mentioning_schemes():
    raw = "Learn javascript: the good parts"
    assert prefilter(raw) == raw


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('<div onclick="steal()" class="a">x</div>', '<div class="a">x</div>'),
        ("<img ONERROR='alert(1)' src=\"/a.png\">", '<img src="/a.png">'),
        ('<p onmouseover = "x()">t</p>', "<p>t</p>"),
    ],
)
def test_removes_quoted_event_handlers(raw, expected):
    assert prefilter(raw) == expected


def test_empty_and_none_input():
    assert prefilter("") == ""
    assert prefilter(None) == ""


def test_removes_whitespace_before_stripped_attribute():
    assert prefilter('<a  \n href="javascript:x()" title="t">x</a>') == '<a title="t">x</a>'


@pytest.mark.parametrize(
    "raw",
    [
        " " * 10_000 + "x",
        "<p" + " " * 10_000 + "on",
        "a" + " " * 10_000 + "b",
        "\t\n " * 3_000 + "=",
    ],
)
def test_whitespace_runs_stay_fast(raw):
    start = time.perf_counter()
    prefilter(raw)
    assert time.perf_counter() - start < 1.0
