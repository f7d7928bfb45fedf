"""Public testimonials (append-only)."""
from sqlalchemy import Column, Integer, String, Text
from app.database import Base, UTCDateTime, utcnow


class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(Integer, primary_key=True, index=True)
    author = Column(String(255), nullable=False)
    relation = Column(String(255), nullable=False)  # e.g. "Daughter of resident"
    text = Column(Text, nullable=False)

    created_at = Column(UTCDateTime(timezone=True), nullable=False, default=utcnow)
