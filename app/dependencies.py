"""Shared dependencies: auth service, current account, image host client, mail sender."""
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.config import Settings, get_settings
from app.services.auth import AuthConfig, AuthService
from app.services.inquiries import ReplySender
from app.services.notifications import send_inquiry_reply
from app.services.storage import CloudinaryStorageClient, InMemoryStorageClient, StorageClient

security = HTTPBearer(auto_error=False)

_storage_client: StorageClient | None = None


def get_auth_service(settings: Settings = Depends(get_settings)) -> AuthService:
    return AuthService(AuthConfig.from_settings(settings))


def get_current_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth: AuthService = Depends(get_auth_service),
) -> str:
    """Email of the signed-in account. 401 without a bearer token, 403 if it is invalid or expired."""
    token = credentials.credentials if credentials else None
    return auth.verify_credential(token)


def get_storage_client() -> StorageClient:
    """Return a singleton image host client; in-memory when Cloudinary is not configured."""
    global _storage_client
    if _storage_client:
        return _storage_client

    settings = get_settings()
    if settings.use_in_memory_storage or not settings.cloudinary_configured:
        _storage_client = InMemoryStorageClient()
    else:
        _storage_client = CloudinaryStorageClient(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
        )
    return _storage_client


def get_reply_sender() -> ReplySender:
    return send_inquiry_reply
