from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from villa.database import get_db
from villa.schemas.settings import VillaSettingsOut, VillaSettingsUpdate
from villa.services.settings_service import SettingsService

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=VillaSettingsOut)
async def get_settings(db: AsyncSession = Depends(get_db)):
    villa = await SettingsService.get_settings(db)
    return VillaSettingsOut.from_model(villa)


@router.put("", response_model=VillaSettingsOut)
async def update_settings(payload: VillaSettingsUpdate, db: AsyncSession = Depends(get_db)):
    villa = await SettingsService.update_settings(db, payload)
    return VillaSettingsOut.from_model(villa)
