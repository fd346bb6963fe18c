"""Tests for the typer CLI."""

import pytest
from typer.testing import CliRunner

from adslot.cli.app import app

runner = CliRunner()


@pytest.fixture
def fresh_db(clean_env, tmp_path):
    path = str(tmp_path / "cli.db")
    clean_env.setenv("ADSLOT_DB_PATH", path)
    return path


def test_init_creates_database(fresh_db):
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    assert "Seeded" in result.output
    assert "Schema version" in result.output

    again = runner.invoke(app, ["init"])
    assert again.exit_code == 0
    assert "Settings already exist" in again.output


def test_status_without_database(fresh_db):
    result = runner.invoke(app, ["status"])
    assert result.exit_code == 1
    assert "Database not found" in result.output


def test_status(app_env, repo):
    repo.create_ad("Promo", "sidebar", content="<p>x</p>")
    result = runner.invoke(app, ["status"])
    assert result.exit_code == 0
    assert "Ads by Position" in result.output
    assert "sidebar" in result.output


def test_sanitize_stdin(clean_env):
    result = runner.invoke(app, ["sanitize"], input="<p>Hello <script>alert(1)</script>World</p>")
    assert result.exit_code == 0
    assert result.output.strip() == "<p>Hello World</p>"


def test_sanitize_file(clean_env, tmp_path):
    path = tmp_path / "ad.html"
    path.write_text("<table><tr><td>Cell</td></tr></table>")
    result = runner.invoke(app, ["sanitize", str(path)])
    assert result.exit_code == 0
    assert result.output.strip() == "Cell"


def test_sanitize_missing_file(clean_env, tmp_path):
    result = runner.invoke(app, ["sanitize", str(tmp_path / "nope.html")])
    assert result.exit_code == 1


def test_ads_add_list_show(app_env, repo):
    result = runner.invoke(app, [
        "ads", "add",
        "--title", "Promo",
        "--position", "sidebar",
        "--content", '<p onclick="x()">Deal</p>',
    ])
    assert result.exit_code == 0
    assert "Created advertisement" in result.output
    assert repo.get_ads()[0]["content"] == "<p>Deal</p>"

    listed = runner.invoke(app, ["ads", "list", "--position", "sidebar"])
    assert listed.exit_code == 0
    assert "Promo" in listed.output

    ad_id = repo.get_ads()[0]["id"]
    shown = runner.invoke(app, ["ads", "show", str(ad_id)])
    assert shown.exit_code == 0
    assert "<p>Deal</p>" in shown.output


def test_ads_add_invalid(app_env, repo):
    result = runner.invoke(app, ["ads", "add", "--title", "Promo", "--position", "popup", "--content", "x"])
    assert result.exit_code == 1
    assert "Invalid position selected." in result.output
    assert repo.get_ads() == []


def test_ads_list_empty(app_env):
    result = runner.invoke(app, ["ads", "list"])
    assert result.exit_code == 0
    assert "No advertisements found" in result.output


def test_ads_show_missing(app_env):
    result = runner.invoke(app, ["ads", "show", "99"])
    assert result.exit_code == 1


def test_ads_deactivate(app_env, repo):
    ad_id = repo.create_ad("Promo", "sidebar", content="<p>x</p>")
    result = runner.invoke(app, ["ads", "deactivate", str(ad_id)])
    assert result.exit_code == 0
    assert repo.get_ad(ad_id)["is_active"] == 0
    assert runner.invoke(app, ["ads", "deactivate", "999"]).exit_code == 1


def test_ads_resanitize(app_env, repo):
    ad_id = repo.create_ad("legacy", "sidebar", content='<a href="javascript:x()">go</a>')
    result = runner.invoke(app, ["ads", "resanitize"])
    assert result.exit_code == 0
    assert "Re-sanitized 1 ad(s)" in result.output
    assert repo.get_ad(ad_id)["content"] == "<a>go</a>"


def test_settings_set_get_list(app_env):
    assert runner.invoke(app, ["settings", "set", "ads_enabled", "0"]).exit_code == 0
    got = runner.invoke(app, ["settings", "get", "ads_enabled"])
    assert got.output.strip() == "0"
    listed = runner.invoke(app, ["settings", "list"])
    assert "max_ads_per_position" in listed.output


def test_security_check_auth_disabled(clean_env):
    result = runner.invoke(app, ["security", "check-auth"])
    assert result.exit_code == 0
    assert "Auth is disabled" in result.output


def test_security_check_auth_enabled(clean_env):
    clean_env.setenv("ADSLOT_ADMIN_PASSWORD", "pw")
    result = runner.invoke(app, ["security", "check-auth"])
    assert "Auth is enabled" in result.output


def test_security_set_password(clean_env):
    result = runner.invoke(app, ["security", "set-password"], input="s3cret\ns3cret\n")
    assert result.exit_code == 0
    assert "$2b$" in result.output
