"""Tests for the ad workflow: validation, sanitized writes, activity and clicks."""

from datetime import date

import pytest

from adslot.ads.service import (
    AdForm,
    AdInactiveError,
    AdNotFoundError,
    AdValidationError,
    create_ad,
    get_active_ads,
    is_ad_active,
    resanitize_ads,
    track_click,
    update_ad,
    validate_ad,
)
from adslot.core.models import AppConfig, SanitizerConfig


def _form(**overrides):
    data = {"title": "Spring Sale", "position": "sidebar", "content": "<p>50% off</p>"}
    data.update(overrides)
    return AdForm(**data)


def test_valid_form_has_no_errors(config):
    cleaned, errors = validate_ad(_form(title="  Spring Sale  "), config)
    assert errors == []
    assert cleaned.title == "Spring Sale"
    assert cleaned.content == "<p>50% off</p>"


def test_content_is_sanitized_during_validation(config):
    cleaned, errors = validate_ad(_form(content='<p onclick="x()">Hi<script>bad()</script></p>'), config)
    assert errors == []
    assert cleaned.content == "<p>Hi</p>"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"title": "   "}, "Title is required."),
        ({"title": "x" * 201}, "Title must be at most 200 characters."),
        ({"position": ""}, "Position is required."),
        ({"position": "popup"}, "Invalid position selected."),
        ({"link_url": "ftp://x.com"}, "Please enter a valid URL for the link."),
        ({"link_url": "javascript:alert(1)"}, "Please enter a valid URL for the link."),
        ({"image_url": "javascript:alert(1)"}, "Please enter a valid image URL."),
        ({"start_date": "2026-13-01"}, "Invalid date."),
        ({"start_date": "2026-05-02", "end_date": "2026-05-01"}, "End date must be after start date."),
        ({"content": "<script>only()</script>"}, "Please provide either an image or content for the advertisement."),
    ],
)
def test_validation_messages(config, overrides, message):
    _, errors = validate_ad(_form(**overrides), config)
    assert message in errors


def test_image_alone_is_enough(config):
    _, errors = validate_ad(_form(content="", image_url="https://cdn.example/a.png"), config)
    assert errors == []


def test_content_length_is_checked_before_sanitizing():
    config = AppConfig(sanitizer=SanitizerConfig(max_content_length=10))
    _, errors = validate_ad(_form(content="<p>" + "x" * 20 + "</p>"), config)
    assert errors == ["Content is too long."]


def test_create_ad_stores_sanitized_content(repo, config):
    ad_id = create_ad(repo, _form(content='<a href="javascript:alert(1)">click</a>'), config)
    ad = repo.get_ad(ad_id)
    assert ad["content"] == "<a>click</a>"
    assert ad["link_url"] is None


def test_create_ad_rejects_invalid_form(repo, config):
    with pytest.raises(AdValidationError) as exc:
        create_ad(repo, _form(title="", position=""), config)
    assert exc.value.errors == ["Title is required.", "Position is required."]
    assert repo.get_ads() == []


def test_update_ad(repo, config):
    ad_id = create_ad(repo, _form(), config)
    update_ad(repo, ad_id, _form(title="Summer", content="<table><tr><td>Cell</td></tr></table>", is_active=False), config)
    ad = repo.get_ad(ad_id)
    assert ad["title"] == "Summer"
    assert ad["content"] == "Cell"
    assert ad["is_active"] == 0


def test_update_missing_ad(repo, config):
    with pytest.raises(AdNotFoundError):
        update_ad(repo, 42, _form(), config)


def test_update_with_invalid_form(repo, config):
    ad_id = create_ad(repo, _form(), config)
    with pytest.raises(AdValidationError):
        update_ad(repo, ad_id, _form(position="nowhere"), config)
    assert repo.get_ad(ad_id)["position"] == "sidebar"


def test_resanitize_ads(repo, config):
    dirty = repo.create_ad("legacy", "sidebar", content="<p>Hi<script>x()</script></p>")
    clean = repo.create_ad("fine", "sidebar", content="<p>ok</p>")
    assert resanitize_ads(repo, config) == 1
    assert repo.get_ad(dirty)["content"] == "<p>Hi</p>"
    assert repo.get_ad(clean)["content"] == "<p>ok</p>"
    assert resanitize_ads(repo, config) == 0


@pytest.mark.parametrize(
    "ad, expected",
    [
        ({"is_active": 1}, True),
        ({"is_active": 0}, False),
        ({"is_active": 1, "start_date": "2026-06-16"}, False),
        ({"is_active": 1, "end_date": "2026-06-14"}, False),
        ({"is_active": 1, "start_date": "2026-06-15", "end_date": "2026-06-15"}, True),
        ({"is_active": True, "start_date": date(2026, 1, 1), "end_date": None}, True),
    ],
)
def test_is_ad_active(ad, expected):
    assert is_ad_active(ad, today=date(2026, 6, 15)) is expected


def test_get_active_ads(repo):
    repo.create_ad("now", "footer", start_date="2026-06-01")
    repo.create_ad("later", "footer", start_date="2026-07-01")
    ads = get_active_ads(repo, "footer", today=date(2026, 6, 15))
    assert [a["title"] for a in ads] == ["now"]


def test_track_click(repo):
    ad_id = repo.create_ad("Promo", "sidebar")
    assert track_click(repo, ad_id) == 1
    assert track_click(repo, ad_id) == 2


def test_track_click_missing(repo):
    with pytest.raises(AdNotFoundError):
        track_click(repo, 7)


def test_track_click_inactive(repo):
    off = repo.create_ad("off", "sidebar", is_active=False)
    expired = repo.create_ad("old", "sidebar", end_date="2026-01-01")
    with pytest.raises(AdInactiveError):
        track_click(repo, off)
    with pytest.raises(AdInactiveError):
        track_click(repo, expired, today=date(2026, 6, 15))
    assert repo.get_ad(off)["click_count"] == 0
