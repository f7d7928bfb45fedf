"""Admin account used to sign in to the dashboard."""
from sqlalchemy import Column, Integer, String
from app.database import Base, UTCDateTime, utcnow


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    created_at = Column(UTCDateTime(timezone=True), default=utcnow)
