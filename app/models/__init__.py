"""
All SQLAlchemy models. Schema is the source of truth for new DBs.
Base.metadata.create_all() creates every table; no migration scripts needed for fresh installs.
"""
from app.models.account import Account
from app.models.inquiry import Inquiry, InquiryStatus
from app.models.image import ImageAsset, ImageType
from app.models.testimonial import Testimonial

__all__ = [
    "Account",
    "Inquiry",
    "InquiryStatus",
    "ImageAsset",
    "ImageType",
    "Testimonial",
]
