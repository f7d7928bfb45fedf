"""
Image host adapter: Cloudinary over its REST API, plus an in-memory client for
development and tests.
"""
from __future__ import annotations

import hashlib
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from app.exceptions import StorageError

log = logging.getLogger("uvicorn.error")

CLOUDINARY_API_BASE = "https://api.cloudinary.com/v1_1"


@dataclass(frozen=True)
class StoredObject:
    url: str
    public_id: str


class StorageClient(Protocol):
    """Operations the image service needs from the image host."""

    def upload(self, content: bytes, folder: str, filename: str | None = None) -> StoredObject:
        ...

    def delete(self, public_id: str) -> None:
        ...


@dataclass
class InMemoryStorageClient:
    """Keeps uploaded bytes in a dict. Used when Cloudinary is not configured."""

    base_url: str = "https://example.test/images"
    stored_objects: dict[str, bytes] = field(default_factory=dict)

    def upload(self, content: bytes, folder: str, filename: str | None = None) -> StoredObject:
        public_id = f"{folder}/{uuid.uuid4().hex}"
        self.stored_objects[public_id] = content
        return StoredObject(url=f"{self.base_url}/{public_id}", public_id=public_id)

    def delete(self, public_id: str) -> None:
        if self.stored_objects.pop(public_id, None) is None:
            raise StorageError(f"Object {public_id} not found")


def _sign(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary request signature: sha1 of sorted key=value pairs joined by '&', then the secret."""
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


@dataclass
class CloudinaryStorageClient:
    cloud_name: str
    api_key: str
    api_secret: str
    timeout: float = 30.0

    def _signed(self, params: dict[str, str]) -> dict[str, str]:
        params = {**params, "timestamp": str(int(time.time()))}
        return {**params, "api_key": self.api_key, "signature": _sign(params, self.api_secret)}

    def upload(self, content: bytes, folder: str, filename: str | None = None) -> StoredObject:
        url = f"{CLOUDINARY_API_BASE}/{self.cloud_name}/image/upload"
        data = self._signed({"folder": folder})
        files = {"file": (filename or "upload", content, "application/octet-stream")}
        try:
            with httpx.Client(timeout=self.timeout) as client:
                r = client.post(url, data=data, files=files)
        except httpx.HTTPError as e:
            log.error("[Storage] Cloudinary upload error folder=%s: %s: %s", folder, type(e).__name__, e)
            raise StorageError("Upload failed") from e
        if r.status_code != 200:
            log.error("[Storage] Cloudinary upload failed: status=%s body=%s", r.status_code, r.text[:500])
            raise StorageError("Upload failed")
        out = r.json()
        secure_url = out.get("secure_url")
        public_id = out.get("public_id")
        if not secure_url or not public_id:
            log.error("[Storage] Cloudinary upload response missing secure_url/public_id: %s", out)
            raise StorageError("Upload failed")
        return StoredObject(url=secure_url, public_id=public_id)

    def delete(self, public_id: str) -> None:
        url = f"{CLOUDINARY_API_BASE}/{self.cloud_name}/image/destroy"
        try:
            with httpx.Client(timeout=self.timeout) as client:
                r = client.post(url, data=self._signed({"public_id": public_id}))
        except httpx.HTTPError as e:
            raise StorageError(f"Delete of {public_id} failed: {e}") from e
        result = (r.json() or {}).get("result") if r.status_code == 200 else None
        if result != "ok":
            raise StorageError(f"Delete of {public_id} failed: status={r.status_code} body={r.text[:200]}")
