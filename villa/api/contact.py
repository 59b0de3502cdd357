import logging

from fastapi import APIRouter

from villa.core.errors import ValidationError
from villa.schemas.contact import ContactAck, ContactInquiry

router = APIRouter(tags=["contact"])
logger = logging.getLogger(__name__)


@router.post("/contact", response_model=ContactAck)
async def contact(payload: ContactInquiry):
    """Inquiries are only logged; nothing is stored or sent."""
    if not payload.name or not payload.email or not payload.message:
        raise ValidationError("Name, email, and message are required")

    logger.info(
        "New contact inquiry",
        extra={
            "contact_name": payload.name,
            "contact_email": payload.email,
            "contact_phone": payload.phone,
            "contact_message": payload.message,
        },
    )
    return ContactAck(message="Thank you for your inquiry. We will get back to you soon!")
