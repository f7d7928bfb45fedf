"""Site images: public listing, dashboard upload and delete."""
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.database import get_db
from app.dependencies import get_current_account, get_storage_client
from app.exceptions import ValidationError
from app.models.image import ImageType
from app.schemas.image import MessageResponse, UploadResponse
from app.services import images
from app.services.storage import StorageClient

router = APIRouter(prefix="/api", tags=["images"])


@router.get("/images", response_model=list[str])
def list_images(
    image_type: str | None = Query(None, alias="type", description="hero, gallery or a service_* category"),
    db: Session = Depends(get_db),
):
    return images.list_urls(db, images.parse_image_type(image_type))


@router.post("/upload", response_model=UploadResponse)
def upload_images(
    _account: str = Depends(get_current_account),
    image_type: str | None = Form(None, alias="type"),
    files: list[UploadFile] | None = File(None, alias="images"),
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage_client),
    settings: Settings = Depends(get_settings),
):
    kind = images.parse_image_type(image_type, default=ImageType.gallery)
    files = files or []
    if len(files) > settings.max_upload_files:
        raise ValidationError(f"At most {settings.max_upload_files} files can be uploaded at once.")
    payload = [images.ImageUpload(content=f.file.read(), filename=f.filename) for f in files]
    urls = images.upload(db, storage, kind, payload, settings.cloudinary_folder)
    return UploadResponse(
        message="Files uploaded successfully",
        file_paths=urls,
        type=kind.value,
        count=len(urls),
    )


@router.delete("/images/{reference:path}", response_model=MessageResponse)
def delete_image(
    reference: str,
    _account: str = Depends(get_current_account),
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage_client),
):
    """Delete by exact reference: the image's row id, its full stored URL
    (percent-encoded) or its image host public id. A bare file name or any
    other fragment of the URL matches nothing and is reported as already deleted.
    """
    if images.delete(db, storage, reference):
        return MessageResponse(message="Image deleted successfully")
    return MessageResponse(message="Image already deleted/not found")
