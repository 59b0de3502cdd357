from datetime import datetime
from typing import Optional

from pydantic import Field

from villa.models import GalleryCategory, GalleryImage
from villa.schemas.base import CamelModel


class GalleryImageCreate(CamelModel):
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: GalleryCategory = GalleryCategory.INTERIOR
    order: int = 0
    is_active: bool = True


class GalleryImageOut(GalleryImageCreate):
    id: int
    created_at: datetime

    @classmethod
    def from_model(cls, image: GalleryImage) -> "GalleryImageOut":
        return cls(
            id=image.id,
            title=image.title,
            description=image.description,
            image_url=image.image_url,
            category=image.category,
            order=image.order,
            is_active=image.is_active,
            created_at=image.created_at,
        )
