"""Admin authentication, CSRF protection, and security headers middleware."""

from __future__ import annotations

import logging
import os
import secrets
import time

import bcrypt
from fastapi import Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from itsdangerous import BadSignature, SignatureExpired, TimestampSigner
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from adslot.web.deps import render

logger = logging.getLogger(__name__)

_SESSION_COOKIE = "_session"
_SESSION_VALUE = "admin"
_SESSION_MAX_AGE = 86400  # 24 hours

CSRF_COOKIE = "_csrf"
CSRF_HEADER = "X-CSRF-Token"

# Routes that don't require authentication
_PUBLIC_PREFIXES = ("/health", "/login", "/static", "/slots", "/track-ad")

_fallback_secret_key = ""
_cached_admin_hash: str | None = None


def _get_secret_key() -> str:
    global _fallback_secret_key
    key = os.environ.get("ADSLOT_SECRET_KEY", "")
    if key:
        return key
    if not _fallback_secret_key:
        _fallback_secret_key = secrets.token_hex(32)
        logger.warning("ADSLOT_SECRET_KEY not set, using random key (sessions won't survive restarts)")
    return _fallback_secret_key


def get_admin_hash() -> str:
    """Bcrypt hash of the admin password, or "" when auth is disabled."""
    global _cached_admin_hash
    if _cached_admin_hash is not None:
        return _cached_admin_hash
    h = os.environ.get("ADSLOT_ADMIN_HASH", "")
    if h:
        _cached_admin_hash = h
        return h
    # A plaintext password is hashed once at runtime.
    pw = os.environ.get("ADSLOT_ADMIN_PASSWORD", "")
    _cached_admin_hash = hash_password(pw) if pw else ""
    return _cached_admin_hash


# ---- Rate limiting ----

_login_attempts: dict[str, list[float]] = {}  # ip -> [timestamps]
_MAX_ATTEMPTS = 5
_WINDOW_SECONDS = 900  # 15 minutes


def get_client_ip(request: Request) -> str:
    """Extract client IP from X-Forwarded-For or the direct connection."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _is_rate_limited(ip: str) -> bool:
    now = time.time()
    attempts = [t for t in _login_attempts.get(ip, []) if now - t < _WINDOW_SECONDS]
    _login_attempts[ip] = attempts
    return len(attempts) >= _MAX_ATTEMPTS


def _is_secure(request: Request) -> bool:
    return request.headers.get("X-Forwarded-Proto") == "https"


# ---- Password helpers ----

def hash_password(password: str) -> str:
    """Hash a password with bcrypt. Use this to generate ADSLOT_ADMIN_HASH."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        return False


# ---- Session helpers ----

def create_session(response: Response, request: Request | None = None) -> Response:
    signed = TimestampSigner(_get_secret_key()).sign(_SESSION_VALUE).decode()
    response.set_cookie(
        _SESSION_COOKIE,
        signed,
        max_age=_SESSION_MAX_AGE,
        httponly=True,
        samesite="lax",
        secure=_is_secure(request) if request else False,
    )
    return response


def clear_session(response: Response) -> Response:
    response.delete_cookie(_SESSION_COOKIE)
    response.delete_cookie(CSRF_COOKIE)
    return response


def is_authenticated(request: Request) -> bool:
    """Check for a valid session cookie. Always True when no password is set."""
    if not get_admin_hash():
        return True
    cookie = request.cookies.get(_SESSION_COOKIE)
    if not cookie:
        return False
    try:
        TimestampSigner(_get_secret_key()).unsign(cookie, max_age=_SESSION_MAX_AGE)
        return True
    except (BadSignature, SignatureExpired):
        return False


def _is_public(path: str) -> bool:
    return any(path.startswith(p) for p in _PUBLIC_PREFIXES)


# ---- Login / Logout route handlers ----

async def login_page(request: Request) -> Response:
    if is_authenticated(request):
        return RedirectResponse("/ads/", status_code=302)
    return HTMLResponse(render("login.html"))


async def login_submit(request: Request) -> Response:
    ip = get_client_ip(request)
    if _is_rate_limited(ip):
        logger.warning("Login rate limited for %s", ip)
        return HTMLResponse(
            render("login.html", error="Too many login attempts. Please try again later."),
            status_code=429,
        )

    form = await request.form()
    password = str(form.get("password", ""))

    if verify_password(password, get_admin_hash()):
        _login_attempts.pop(ip, None)
        response = RedirectResponse("/ads/", status_code=302)
        create_session(response, request)
        return response

    _login_attempts.setdefault(ip, []).append(time.time())
    logger.info("Failed admin login from %s", ip)
    return HTMLResponse(render("login.html", error="Invalid password"), status_code=401)


async def logout(request: Request) -> Response:
    response = RedirectResponse("/login", status_code=302)
    clear_session(response)
    return response


# ---- Middleware ----

_CSP = (
    "default-src 'self'; "
    "script-src 'self' https://unpkg.com; "
    "style-src 'self' 'unsafe-inline'; "
    "img-src 'self' https: http:; "
    "frame-ancestors 'none'; "
    "object-src 'none'; "
    "base-uri 'self'; "
    "form-action 'self'"
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = _CSP
        if _is_secure(request):
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


class AuthMiddleware(BaseHTTPMiddleware):
    """Require an admin session for non-public routes."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if _is_public(request.url.path) or is_authenticated(request):
            return await call_next(request)
        if request.headers.get("HX-Request"):
            return Response(status_code=401, headers={"HX-Redirect": "/login"})
        return RedirectResponse("/login", status_code=302)


class CSRFMiddleware(BaseHTTPMiddleware):
    """Double-submit cookie CSRF protection for state-changing admin requests."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        guarded = not _is_public(request.url.path) and is_authenticated(request)
        if guarded and request.method in ("POST", "PUT", "DELETE", "PATCH"):
            cookie_token = request.cookies.get(CSRF_COOKIE, "")
            header_token = request.headers.get(CSRF_HEADER, "")
            if not cookie_token or not secrets.compare_digest(cookie_token.encode(), header_token.encode()):
                return Response("CSRF token mismatch", status_code=403)

        response = await call_next(request)

        if guarded and CSRF_COOKIE not in request.cookies:
            response.set_cookie(
                CSRF_COOKIE,
                secrets.token_hex(32),
                httponly=False,  # htmx reads it into the request header
                samesite="lax",
                max_age=_SESSION_MAX_AGE,
                secure=_is_secure(request),
            )
        return response
