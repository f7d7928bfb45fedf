"""Inquiry schemas. JSON uses camelCase (tourDate, createdAt) to match the dashboard client."""
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from pydantic.alias_generators import to_camel
from app.models.inquiry import InquiryStatus


def _blank_to_none(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


class InquiryCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    email: EmailStr
    phone: str | None = None
    message: str | None = None
    tour_date: str | None = None

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Name is required.")
        return v

    @field_validator("phone", "message", "tour_date")
    @classmethod
    def optional_text(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class InquiryResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    name: str
    email: str
    phone: str | None = None
    message: str | None = None
    tour_date: str | None = None
    status: InquiryStatus
    created_at: datetime
    updated_at: datetime | None = None


class InquiryCreated(BaseModel):
    message: str
    data: InquiryResponse


class StatusUpdate(BaseModel):
    status: InquiryStatus


class ReplyRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    reply_message: str = ""
