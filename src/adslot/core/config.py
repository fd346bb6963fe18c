"""Configuration loader: YAML files + environment variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from adslot.core.models import AdsConfig, AppConfig, SanitizerConfig, SiteConfig
from adslot.sanitizer import AD_POLICY, Policy


def _find_project_root() -> Path:
    """Walk up from cwd to find a directory containing pyproject.toml."""
    cwd = Path.cwd()
    for p in [cwd, *cwd.parents]:
        if (p / "pyproject.toml").exists():
            return p
    return cwd


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load configuration from YAML + environment variables.

    Priority: env vars > .env file > YAML defaults.
    """
    root = _find_project_root()
    load_dotenv(root / ".env")

    yaml_path = Path(config_path) if config_path else root / "config" / "default.yaml"
    yaml_data: dict = {}
    if yaml_path.exists():
        with open(yaml_path) as f:
            yaml_data = yaml.safe_load(f) or {}

    site_data = yaml_data.get("site", {})
    site = SiteConfig(
        name=os.getenv("ADSLOT_SITE_NAME", site_data.get("name", "adslot")),
        base_url=site_data.get("base_url", "http://localhost:8000"),
    )

    san_data = yaml_data.get("sanitizer", {})
    sanitizer = SanitizerConfig(
        max_content_length=int(
            os.getenv("ADSLOT_MAX_CONTENT_LENGTH", san_data.get("max_content_length", 10_000))
        ),
        max_passes=int(san_data.get("max_passes", 3)),
        allowed_attributes=san_data.get("allowed_attributes"),
    )

    ads_data = yaml_data.get("ads", {})
    ads = AdsConfig(**ads_data)

    db_path = os.getenv("ADSLOT_DB_PATH", yaml_data.get("db_path", "data/adslot.db"))

    return AppConfig(site=site, sanitizer=sanitizer, ads=ads, db_path=db_path)


def build_policy(config: SanitizerConfig) -> Policy:
    """Return the policy the sanitizer should run with for ``config``."""
    if config.allowed_attributes is None:
        return AD_POLICY
    return Policy.from_mapping(config.allowed_attributes)
