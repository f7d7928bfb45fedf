"""Visitor contact / tour requests and their review status."""
from sqlalchemy import Column, Integer, String, Text, Enum as SQLEnum
from app.database import Base, UTCDateTime, utcnow
import enum


class InquiryStatus(str, enum.Enum):
    new = "new"
    read = "read"
    replied = "replied"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)


# Status only ever moves forward in this order
_STATUS_ORDER = [InquiryStatus.new, InquiryStatus.read, InquiryStatus.replied]


class Inquiry(Base):
    __tablename__ = "inquiries"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    message = Column(Text, nullable=True)
    tour_date = Column(String(100), nullable=True)  # free text from the form, e.g. "2026-11-02 afternoon"

    status = Column(SQLEnum(InquiryStatus), nullable=False, default=InquiryStatus.new, index=True)

    created_at = Column(UTCDateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(UTCDateTime(timezone=True), onupdate=utcnow)
