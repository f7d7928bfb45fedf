"""
Database connection and session.

Schema source of truth: app.models. On startup, Base.metadata.create_all(bind=engine)
creates the accounts, inquiries, images and testimonials tables from the current
models. SQLite is used for local development; set DATABASE_URL to a Postgres URL
(postgres://, postgresql:// or postgresql+psycopg://) for production.
"""
import re
from datetime import datetime, timezone

from sqlalchemy import DateTime, create_engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.types import TypeDecorator
from app.config import get_settings


def normalize_database_url(url: str) -> str:
    """Point bare Postgres URLs (as handed out by hosting providers) at the psycopg driver."""
    return re.sub(r"^postgres(?:ql)?://", "postgresql+psycopg://", url.strip(), count=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timestamp stored as UTC and always read back timezone-aware.

    SQLite keeps no offset, so values come back naive; they are UTC by construction.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


settings = get_settings()
database_url = normalize_database_url(settings.database_url)

_engine_kwargs: dict = {"pool_pre_ping": True}
# SQLite connections are shared across the threadpool FastAPI runs sync routes on
if database_url.startswith("sqlite"):
    _engine_kwargs["connect_args"] = {"check_same_thread": False}

engine = create_engine(database_url, **_engine_kwargs)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
