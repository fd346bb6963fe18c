"""FastAPI web application: ad admin, public slots and click tracking."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from adslot.core.database import init_database, seed_settings
from adslot.web.deps import TEMPLATES_DIR, get_config, render, resolve_db_path
from adslot.web.security import (
    AuthMiddleware,
    CSRFMiddleware,
    SecurityHeadersMiddleware,
    login_page,
    login_submit,
    logout,
)

logger = logging.getLogger(__name__)

_STATIC_DIR = TEMPLATES_DIR / "static"


def create_app() -> FastAPI:
    app = FastAPI(title="adslot", docs_url=None, redoc_url=None)

    # Security middleware (order matters: outermost runs first)
    app.add_middleware(CSRFMiddleware)
    app.add_middleware(AuthMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_api_route("/login", login_page, methods=["GET"])
    app.add_api_route("/login", login_submit, methods=["POST"])
    app.add_api_route("/logout", logout, methods=["GET"])

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return HTMLResponse(render("404.html"), status_code=404)
        return HTMLResponse(str(exc.detail), status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled server error")
        return HTMLResponse(render("500.html"), status_code=500)

    @app.on_event("startup")
    def startup_init_db():
        db_path = resolve_db_path(get_config().db_path)
        init_database(db_path)
        added = seed_settings(db_path)
        if added:
            logger.info("Seeded %d default site settings", added)
        logger.info("Database initialized at %s", db_path)

    @app.get("/")
    def index():
        return RedirectResponse("/ads/", status_code=302)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    if _STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")

    # Import routes here to avoid circular imports at module level
    from adslot.web.routes import ads, slots, track

    app.include_router(ads.router, prefix="/ads")
    app.include_router(slots.router, prefix="/slots")
    app.include_router(track.router)

    return app
