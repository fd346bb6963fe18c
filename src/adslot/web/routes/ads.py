"""Ad management routes (admin only)."""

from __future__ import annotations

from fastapi import APIRouter, Form
from fastapi.responses import HTMLResponse

from adslot.ads.service import AdForm, AdNotFoundError, AdValidationError, create_ad, update_ad
from adslot.core.config import build_policy
from adslot.sanitizer import MarkupSanitizer
from adslot.web.deps import get_config, get_repo, render

router = APIRouter()


def _form(
    title: str, content: str, image_url: str, link_url: str, position: str,
    is_active: str, start_date: str, end_date: str,
) -> AdForm:
    return AdForm(
        title=title,
        content=content,
        image_url=image_url,
        link_url=link_url,
        position=position,
        is_active=bool(is_active),
        start_date=start_date,
        end_date=end_date,
    )


def _errors(errors: list[str]) -> HTMLResponse:
    return HTMLResponse(
        render("partials/alert.html", messages=errors, level="error"),
        status_code=400,
    )


@router.get("/", response_class=HTMLResponse)
async def ads_page(position: str = ""):
    repo = get_repo()
    cfg = get_config()
    return render("ads.html",
        ads=repo.get_ads(position=position or None),
        positions=cfg.ads.positions,
        selected=position,
    )


@router.post("/add", response_class=HTMLResponse)
async def add_ad(
    title: str = Form(""),
    content: str = Form(""),
    image_url: str = Form(""),
    link_url: str = Form(""),
    position: str = Form(""),
    is_active: str = Form(""),
    start_date: str = Form(""),
    end_date: str = Form(""),
):
    repo = get_repo()
    cfg = get_config()
    form = _form(title, content, image_url, link_url, position, is_active, start_date, end_date)
    try:
        create_ad(repo, form, cfg)
    except AdValidationError as exc:
        return _errors(exc.errors)

    return render("partials/ads_table.html",
        ads=repo.get_ads(),
        message="Advertisement created successfully!", level="success")


@router.post("/preview", response_class=HTMLResponse)
async def preview_content(content: str = Form("")):
    cfg = get_config()
    if len(content) > cfg.sanitizer.max_content_length:
        return _errors(["Content is too long."])
    sanitizer = MarkupSanitizer(build_policy(cfg.sanitizer), max_passes=cfg.sanitizer.max_passes)
    return render("partials/preview.html", content=sanitizer.sanitize(content))


@router.get("/{ad_id}", response_class=HTMLResponse)
async def edit_ad_page(ad_id: int):
    repo = get_repo()
    ad = repo.get_ad(ad_id)
    if not ad:
        return HTMLResponse(
            render("partials/alert.html", messages=["Advertisement not found."], level="error"),
            status_code=404,
        )
    return render("ad_edit.html", ad=ad, positions=get_config().ads.positions)


@router.post("/{ad_id}/update", response_class=HTMLResponse)
async def update_ad_route(
    ad_id: int,
    title: str = Form(""),
    content: str = Form(""),
    image_url: str = Form(""),
    link_url: str = Form(""),
    position: str = Form(""),
    is_active: str = Form(""),
    start_date: str = Form(""),
    end_date: str = Form(""),
):
    repo = get_repo()
    cfg = get_config()
    form = _form(title, content, image_url, link_url, position, is_active, start_date, end_date)
    try:
        update_ad(repo, ad_id, form, cfg)
    except AdNotFoundError:
        return HTMLResponse(
            render("partials/alert.html", messages=["Advertisement not found."], level="error"),
            status_code=404,
        )
    except AdValidationError as exc:
        return _errors(exc.errors)

    return render("ad_edit.html",
        ad=repo.get_ad(ad_id), positions=cfg.ads.positions,
        message="Advertisement updated successfully!", level="success")


@router.post("/{ad_id}/delete", response_class=HTMLResponse)
async def delete_ad(ad_id: int):
    repo = get_repo()
    repo.delete_ad(ad_id)
    return render("partials/ads_table.html",
        ads=repo.get_ads(), message="Advertisement deleted.", level="success")
