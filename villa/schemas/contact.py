from typing import Optional

from pydantic import EmailStr, field_validator

from villa.schemas.base import CamelModel, blank_to_none


class ContactInquiry(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    message: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name", "email", "message", "phone", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)


class ContactAck(CamelModel):
    message: str
