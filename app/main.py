"""Fountain of Peace – FastAPI application for the public site and admin dashboard."""
# Load .env before any app code that might read config
from dotenv import load_dotenv
from pathlib import Path
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from app.config import get_settings
from app.database import Base, SessionLocal, engine
from app.exceptions import register_exception_handlers
# Import models so Base.metadata has all tables before create_all (schema source of truth)
from app.models import Account, Inquiry, ImageAsset, Testimonial  # noqa: F401
from app.routers import auth, chat, images, inquiries, testimonials
from app.seed import seed_all

log = logging.getLogger("uvicorn.error")

settings = get_settings()
app = FastAPI(title=settings.app_name, debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(inquiries.router)
app.include_router(images.router)
app.include_router(testimonials.router)
app.include_router(chat.router)


@app.on_event("startup")
def startup():
    if settings.mailgun_api_key and settings.mailgun_domain:
        log.info("[Mailgun] Replies will be sent from domain=%s", settings.mailgun_domain)
    elif settings.sendgrid_api_key:
        log.info("[SendGrid] Replies will be sent from %s", settings.sendgrid_from_email)
    else:
        log.warning("[Email] Not configured - inquiry replies will fail until MAILGUN_API_KEY and MAILGUN_DOMAIN are set in .env")
    if not settings.cloudinary_configured:
        log.warning("[Storage] Cloudinary not configured - uploads are kept in memory and lost on restart")
    try:
        Base.metadata.create_all(bind=engine)
        db = SessionLocal()
        try:
            seed_all(db, settings)
        finally:
            db.close()
    except SQLAlchemyError as e:
        log.warning("Database startup failed (tables/seed skipped). Check DATABASE_URL and network. Error: %s", e)


@app.get("/")
def root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
