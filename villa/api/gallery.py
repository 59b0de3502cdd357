from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from villa.database import get_db
from villa.models import GalleryCategory
from villa.schemas.gallery import GalleryImageCreate, GalleryImageOut
from villa.services.gallery_service import GalleryService

router = APIRouter(prefix="/gallery", tags=["gallery"])


@router.get("", response_model=list[GalleryImageOut])
async def list_gallery(
    category: Optional[GalleryCategory] = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    images = await GalleryService.list_images(db, category)
    return [GalleryImageOut.from_model(i) for i in images]


@router.post("", response_model=GalleryImageOut, status_code=status.HTTP_201_CREATED)
async def create_gallery_image(payload: GalleryImageCreate, db: AsyncSession = Depends(get_db)):
    image = await GalleryService.create_image(db, payload)
    return GalleryImageOut.from_model(image)
