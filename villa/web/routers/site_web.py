from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from villa.core.config import settings
from villa.database import get_db
from villa.services.gallery_service import GalleryService
from villa.services.settings_service import SettingsService

WEB_DIR = Path(__file__).resolve().parent.parent

templates = Jinja2Templates(directory=str(WEB_DIR / "templates"))


def format_money(value) -> str:
    if value is None:
        return ""
    return f"${value:,.2f}"


templates.env.filters["money"] = format_money

router = APIRouter(tags=["web"])


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def home(request: Request, db: AsyncSession = Depends(get_db)):
    """Landing page: gallery, calendar and booking form."""
    villa = await SettingsService.get_settings(db)
    images = await GalleryService.list_images(db)

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": "Villa Niva – Rooted Heaven",
            "villa": villa,
            "images": images,
            "api_base": settings.api_prefix,
        },
    )
