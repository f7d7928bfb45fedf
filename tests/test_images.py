from urllib.parse import quote

import pytest

from app.exceptions import StorageError, ValidationError
from app.models.image import ImageAsset, ImageType
from app.services import images
from app.services.images import ImageUpload
from app.services.storage import InMemoryStorageClient, StoredObject


class FlakyStorage(InMemoryStorageClient):
    """Fails the n-th upload (1-based) and every delete when ``fail_deletes`` is set."""

    def __init__(self, fail_on_upload: int | None = None, fail_deletes: bool = False):
        super().__init__()
        self.fail_on_upload = fail_on_upload
        self.fail_deletes = fail_deletes
        self.uploads = 0

    def upload(self, content: bytes, folder: str, filename: str | None = None) -> StoredObject:
        self.uploads += 1
        if self.uploads == self.fail_on_upload:
            raise StorageError("Upload failed")
        return super().upload(content, folder, filename)

    def delete(self, public_id: str) -> None:
        if self.fail_deletes:
            raise StorageError("host unavailable")
        super().delete(public_id)


def _files(n: int) -> list[tuple[str, tuple[str, bytes, str]]]:
    return [("images", (f"photo{i}.jpg", f"jpeg-bytes-{i}".encode(), "image/jpeg")) for i in range(n)]


def test_upload_three_hero_images(client, db, storage, auth_headers):
    r = client.post("/api/upload", data={"type": "hero"}, files=_files(3), headers=auth_headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "Files uploaded successfully"
    assert body["type"] == "hero"
    assert body["count"] == 3
    assert len(body["filePaths"]) == 3

    rows = db.query(ImageAsset).all()
    assert len(rows) == 3
    assert {row.type for row in rows} == {"hero"}
    assert all(row.public_id in storage.stored_objects for row in rows)

    listed = client.get("/api/images", params={"type": "hero"}).json()
    assert listed == list(reversed(body["filePaths"]))


def test_upload_defaults_to_gallery(client, auth_headers):
    r = client.post("/api/upload", files=_files(1), headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["type"] == "gallery"
    assert client.get("/api/images", params={"type": "gallery"}).json() == r.json()["filePaths"]


def test_upload_requires_token(client, db):
    r = client.post("/api/upload", data={"type": "hero"}, files=_files(1))
    assert r.status_code == 401
    assert db.query(ImageAsset).count() == 0


def test_upload_without_files_is_400(client, auth_headers):
    r = client.post("/api/upload", data={"type": "hero"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "No files uploaded."}


def test_upload_unknown_type_is_400(client, db, auth_headers):
    r = client.post("/api/upload", data={"type": "banner"}, files=_files(1), headers=auth_headers)
    assert r.status_code == 400
    assert db.query(ImageAsset).count() == 0


def test_upload_keeps_files_stored_before_a_failure(db):
    storage = FlakyStorage(fail_on_upload=2)
    files = [ImageUpload(content=b"a", filename="a.jpg"), ImageUpload(content=b"b"), ImageUpload(content=b"c")]
    with pytest.raises(StorageError):
        images.upload(db, storage, ImageType.gallery, files, "fountainofpeace")
    assert db.query(ImageAsset).count() == 1
    assert storage.uploads == 2


def test_upload_storage_failure_is_500(client, db, auth_headers):
    from app.dependencies import get_storage_client
    from app.main import app

    app.dependency_overrides[get_storage_client] = lambda: FlakyStorage(fail_on_upload=1)
    r = client.post("/api/upload", data={"type": "hero"}, files=_files(2), headers=auth_headers)
    assert r.status_code == 500
    assert r.json() == {"error": "Upload failed"}
    assert db.query(ImageAsset).count() == 0


def test_upload_rejects_empty_file_before_storing(db):
    storage = InMemoryStorageClient()
    with pytest.raises(ValidationError):
        images.upload(db, storage, ImageType.hero, [ImageUpload(content=b"x"), ImageUpload(content=b"")], "root")
    assert storage.stored_objects == {}


def test_list_all_images_newest_first(client, db, storage):
    images.upload(db, storage, ImageType.hero, [ImageUpload(content=b"1")], "root")
    images.upload(db, storage, ImageType.gallery, [ImageUpload(content=b"2")], "root")
    urls = client.get("/api/images").json()
    assert len(urls) == 2
    assert urls[0].startswith(f"{storage.base_url}/root/gallery/")


def test_list_unknown_type_is_400(client):
    assert client.get("/api/images", params={"type": "banner"}).status_code == 400


def test_delete_by_url(client, db, storage, auth_headers):
    [url] = images.upload(db, storage, ImageType.gallery, [ImageUpload(content=b"x")], "root")
    r = client.delete(f"/api/images/{quote(url, safe='')}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Image deleted successfully"}
    assert db.query(ImageAsset).count() == 0
    assert storage.stored_objects == {}


def test_delete_by_id_and_public_id(db, storage):
    images.upload(db, storage, ImageType.gallery, [ImageUpload(content=b"x"), ImageUpload(content=b"y")], "root")
    first, second = db.query(ImageAsset).order_by(ImageAsset.id).all()
    assert images.delete(db, storage, str(first.id))
    assert images.delete(db, storage, second.public_id)
    assert db.query(ImageAsset).count() == 0


def test_delete_missing_is_success(client, auth_headers):
    r = client.delete("/api/images/does-not-exist.jpg", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Image already deleted/not found"}


def test_delete_does_not_match_substrings(db, storage):
    [url] = images.upload(db, storage, ImageType.gallery, [ImageUpload(content=b"x")], "root")
    assert not images.delete(db, storage, url[-8:])
    assert not images.delete(db, storage, "gallery")
    assert db.query(ImageAsset).count() == 1


def test_delete_by_file_name_alone_matches_nothing(client, db, storage, auth_headers):
    [url] = images.upload(db, storage, ImageType.gallery, [ImageUpload(content=b"x")], "root")
    file_name = url.split("/")[-1]
    r = client.delete(f"/api/images/{file_name}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Image already deleted/not found"}
    assert db.query(ImageAsset).count() == 1
    assert len(storage.stored_objects) == 1


def test_delete_removes_row_even_if_host_fails(db):
    storage = FlakyStorage(fail_deletes=True)
    [url] = images.upload(db, storage, ImageType.hero, [ImageUpload(content=b"x")], "root")
    assert images.delete(db, storage, url)
    assert db.query(ImageAsset).count() == 0


def test_delete_requires_token(client, db, storage):
    [url] = images.upload(db, storage, ImageType.gallery, [ImageUpload(content=b"x")], "root")
    r = client.delete(f"/api/images/{quote(url, safe='')}")
    assert r.status_code == 401
    assert db.query(ImageAsset).count() == 1


def test_seed_service_images_once(db):
    assert images.seed_service_images(db) == 6
    assert images.seed_service_images(db) == 0
    assert images.list_urls(db, ImageType.service_meals) == [images.DEFAULT_SERVICE_IMAGES[ImageType.service_meals]]
    assert images.list_urls(db, ImageType.hero) == []


def test_seeded_service_image_is_deletable_without_host(client, db, storage, auth_headers):
    images.seed_service_images(db)
    url = images.DEFAULT_SERVICE_IMAGES[ImageType.service_social]
    r = client.delete(f"/api/images/{quote(url, safe='')}", headers=auth_headers)
    assert r.json() == {"message": "Image deleted successfully"}
    assert images.list_urls(db, ImageType.service_social) == []
