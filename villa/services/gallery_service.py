from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from villa.models import GalleryCategory, GalleryImage
from villa.schemas.gallery import GalleryImageCreate


class GalleryService:
    @staticmethod
    async def list_images(
        db: AsyncSession, category: Optional[GalleryCategory] = None
    ) -> List[GalleryImage]:
        stmt = select(GalleryImage).where(GalleryImage.is_active.is_(True))
        if category:
            stmt = stmt.where(GalleryImage.category == category)
        stmt = stmt.order_by(
            GalleryImage.order.asc(),
            GalleryImage.created_at.desc(),
            GalleryImage.id.desc(),
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def create_image(db: AsyncSession, image_in: GalleryImageCreate) -> GalleryImage:
        image = GalleryImage(**image_in.model_dump())
        db.add(image)
        await db.commit()
        await db.refresh(image)
        return image
