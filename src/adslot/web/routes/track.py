"""Public click tracking endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from adslot.ads.service import AdInactiveError, AdNotFoundError, track_click
from adslot.web.deps import get_repo

logger = logging.getLogger(__name__)

router = APIRouter()

_NO_STORE = {"Cache-Control": "no-store"}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=_NO_STORE)


@router.api_route("/track-ad", methods=["GET", "PUT", "PATCH", "DELETE"])
async def track_ad_wrong_method():
    return _error(405, "Method not allowed")


@router.post("/track-ad")
async def track_ad(request: Request):
    if "application/json" not in request.headers.get("Content-Type", ""):
        return _error(400, "Invalid content type")

    try:
        body = await request.json()
    except ValueError:
        return _error(400, "Invalid JSON")

    try:
        ad_id = int(body.get("ad_id", 0)) if isinstance(body, dict) else 0
    except (TypeError, ValueError):
        ad_id = 0
    if ad_id <= 0:
        return _error(400, "Invalid ad ID")

    try:
        count = track_click(get_repo(), ad_id)
    except AdNotFoundError:
        return _error(404, "Advertisement not found")
    except AdInactiveError:
        return _error(403, "Advertisement is not active")
    except Exception:
        logger.exception("Ad tracking error for ad %d", ad_id)
        return _error(500, "Internal server error")

    return JSONResponse(
        content={
            "success": True,
            "message": "Click tracked successfully",
            "click_count": count,
        },
        headers=_NO_STORE,
    )
