"""First-boot data: the dashboard admin account and default service images."""
from sqlalchemy.orm import Session

from app.config import Settings
from app.services.auth import seed_admin
from app.services.images import seed_service_images


def seed_all(db: Session, settings: Settings) -> None:
    seed_admin(db, settings.admin_email, settings.admin_password)
    if settings.seed_service_images:
        seed_service_images(db)
