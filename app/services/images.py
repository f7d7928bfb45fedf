"""Image assets: list by display category, upload to the image host, delete."""
import logging
from dataclasses import dataclass

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.exceptions import StorageError, ValidationError
from app.models.image import ImageAsset, ImageType, SERVICE_IMAGE_TYPES
from app.services.storage import StorageClient

log = logging.getLogger("uvicorn.error")

# Shown on the services page until an operator uploads a replacement
DEFAULT_SERVICE_IMAGES = {
    ImageType.service_supervision: "https://images.unsplash.com/photo-1576765608535-5f04d1e3f289?auto=format&fit=crop&q=80&w=600",
    ImageType.service_healthcare: "https://images.unsplash.com/photo-1576091160399-112ba8d25d1d?auto=format&fit=crop&q=80&w=600",
    ImageType.service_adl: "https://images.unsplash.com/photo-1516733725897-1aa73b87c8e8?auto=format&fit=crop&q=80&w=600",
    ImageType.service_meals: "https://images.unsplash.com/photo-1498837167922-ddd27525d352?auto=format&fit=crop&q=80&w=600",
    ImageType.service_housekeeping: "https://images.unsplash.com/photo-1581578731117-104f2a41272c?auto=format&fit=crop&q=80&w=600",
    ImageType.service_social: "https://images.unsplash.com/photo-1573497019940-1c28c88b4f3e?auto=format&fit=crop&q=80&w=600",
}


@dataclass
class ImageUpload:
    content: bytes
    filename: str | None = None


def parse_image_type(value: str | None, default: ImageType | None = None) -> ImageType | None:
    if value is None or not value.strip():
        return default
    try:
        return ImageType(value.strip())
    except ValueError:
        allowed = ", ".join(t.value for t in ImageType)
        raise ValidationError(f"Unknown image type '{value}'. Use one of: {allowed}.")


def list_urls(db: Session, image_type: ImageType | None = None) -> list[str]:
    q = db.query(ImageAsset)
    if image_type is not None:
        q = q.filter(ImageAsset.type == image_type.value)
    images = q.order_by(ImageAsset.created_at.desc(), ImageAsset.id.desc()).all()
    return [img.url for img in images]


def upload(
    db: Session,
    storage: StorageClient,
    image_type: ImageType,
    files: list[ImageUpload],
    folder_root: str,
) -> list[str]:
    """Store each file on the image host and index it.

    Each file is committed as soon as it is stored. If the host fails on a later
    file, StorageError is raised and the files before it stay indexed.
    """
    if not files:
        raise ValidationError("No files uploaded.")
    empty = [f.filename or "(unnamed)" for f in files if not f.content]
    if empty:
        raise ValidationError(f"Empty file(s): {', '.join(empty)}.")
    folder = f"{folder_root}/{image_type.value}"
    urls: list[str] = []
    for f in files:
        try:
            stored = storage.upload(f.content, folder, filename=f.filename)
        except StorageError:
            log.error("[Images] Upload stopped after %d of %d file(s) of type %s", len(urls), len(files), image_type.value)
            raise
        db.add(ImageAsset(url=stored.url, public_id=stored.public_id, type=image_type.value))
        db.commit()
        urls.append(stored.url)
    log.info("[Images] Uploaded %d image(s) of type %s", len(urls), image_type.value)
    return urls


def find_image(db: Session, reference: str) -> ImageAsset | None:
    """Exact lookup by row id, stored URL or deletion handle."""
    reference = (reference or "").strip()
    if not reference:
        return None
    conditions = [ImageAsset.url == reference, ImageAsset.public_id == reference]
    if reference.isdigit():
        conditions.append(ImageAsset.id == int(reference))
    return db.query(ImageAsset).filter(or_(*conditions)).order_by(ImageAsset.id.desc()).first()


def delete(db: Session, storage: StorageClient, reference: str) -> bool:
    """Remove an image. Returns False when nothing matched, which callers treat as success."""
    image = find_image(db, reference)
    if not image:
        return False
    if image.public_id:
        try:
            storage.delete(image.public_id)
        except StorageError as e:
            log.error("[Images] Image host deletion failed for %s: %s", image.public_id, e)
    image_id, image_type = image.id, image.type
    db.delete(image)
    db.commit()
    log.info("[Images] Deleted image id=%s type=%s", image_id, image_type)
    return True


def seed_service_images(db: Session) -> int:
    """Give every service category a default image if it has none. Returns how many were added."""
    added = 0
    for image_type in SERVICE_IMAGE_TYPES:
        if db.query(ImageAsset).filter(ImageAsset.type == image_type.value).first():
            continue
        db.add(ImageAsset(url=DEFAULT_SERVICE_IMAGES[image_type], public_id=None, type=image_type.value))
        added += 1
    if added:
        db.commit()
        log.info("[Seed] Seeded %d default service image(s)", added)
    return added
