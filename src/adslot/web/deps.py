"""Shared dependencies for web routes."""

from __future__ import annotations

import os
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from adslot.core.config import load_config
from adslot.core.models import POSITION_LABELS, AppConfig
from adslot.db.repository import Repository
from adslot.utils.text import excerpt

TEMPLATES_DIR = Path(__file__).parent.parent.parent.parent / "templates" / "web"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=True,
)
_env.filters["excerpt"] = excerpt
_env.globals["position_labels"] = POSITION_LABELS


def get_config() -> AppConfig:
    return load_config()


def resolve_db_path(db_path: str) -> str:
    # Container deployments keep data under /app, local runs under cwd.
    if not os.path.isabs(db_path):
        if os.path.exists("/app"):
            return os.path.join("/app", db_path)
        return os.path.abspath(db_path)
    return db_path


def get_repo() -> Repository:
    return Repository(resolve_db_path(get_config().db_path))


def render(template_name: str, **ctx) -> str:
    tpl = _env.get_template(template_name)
    return tpl.render(**ctx)
