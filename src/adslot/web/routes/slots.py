"""Public ad slot rendering."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from adslot.ads.service import get_active_ads
from adslot.web.deps import get_config, get_repo, render

router = APIRouter()


@router.get("/{position}", response_class=HTMLResponse)
async def slot(position: str):
    cfg = get_config()
    if position not in cfg.ads.positions:
        return HTMLResponse("", status_code=404)

    repo = get_repo()
    if repo.get_setting("ads_enabled", "1") != "1":
        return HTMLResponse("")

    ads = get_active_ads(repo, position)
    limit = int(repo.get_setting("max_ads_per_position", "0") or 0)
    if limit > 0:
        ads = ads[:limit]
    # Stored content is sanitizer output and is emitted unescaped by the template.
    return render("partials/ad_slot.html", ads=ads, position=position)
