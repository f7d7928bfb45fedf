"""Image assets stored on the external image host, indexed locally by display category."""
from sqlalchemy import Column, Integer, String
from app.database import Base, UTCDateTime, utcnow
import enum


class ImageType(str, enum.Enum):
    hero = "hero"
    gallery = "gallery"
    service_supervision = "service_supervision"
    service_healthcare = "service_healthcare"
    service_adl = "service_adl"
    service_meals = "service_meals"
    service_housekeeping = "service_housekeeping"
    service_social = "service_social"


SERVICE_IMAGE_TYPES = [t for t in ImageType if t.value.startswith("service_")]


class ImageAsset(Base):
    __tablename__ = "images"

    id = Column(Integer, primary_key=True, index=True)
    url = Column(String(1024), nullable=False, index=True)
    public_id = Column(String(512), nullable=True, index=True)  # deletion handle on the image host
    # Stored as plain string; values are checked against ImageType before insert
    type = Column(String(50), nullable=False, default=ImageType.gallery.value, index=True)

    created_at = Column(UTCDateTime(timezone=True), nullable=False, default=utcnow)
