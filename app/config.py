"""Application configuration from environment."""
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache

# Load .env from project root (parent of app/) so env vars are available everywhere
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)


class Settings(BaseSettings):
    app_name: str = "Fountain of Peace API"
    app_env: str = "development"
    debug: bool = True

    database_url: str = "sqlite:///./assisted_living.db"
    frontend_urls: str = "http://localhost:3000"

    # Development-only default; JWT_SECRET_KEY in the environment overrides it
    jwt_secret_key: str = "supersecretkey123"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60

    @field_validator("jwt_secret_key")
    @classmethod
    def strip_jwt_secret(cls, v: str) -> str:
        return (v or "").strip()

    admin_email: str = "admin@fountainofpeace.com"
    admin_password: str = "admin123"
    seed_service_images: bool = True

    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    cloudinary_folder: str = "fountainofpeace"
    use_in_memory_storage: bool = False
    max_upload_files: int = 10

    sendgrid_api_key: str = ""
    sendgrid_from_email: str = "noreply@fountainofpeace.com"
    sendgrid_from_name: str = "Fountain of Peace"

    mailgun_api_key: str = ""
    mailgun_domain: str = ""
    mailgun_base_url: str = "https://api.mailgun.net"
    mailgun_from_email: str = "noreply@fountainofpeace.com"
    mailgun_from_name: str = "Fountain of Peace"

    @field_validator("mailgun_api_key", "mailgun_domain", "mailgun_base_url", "mailgun_from_email", mode="before")
    @classmethod
    def strip_mailgun(cls, v: str) -> str:
        return (v or "").strip()

    chat_api_key: str = ""
    chat_api_url: str = "https://api.openai.com/v1/chat/completions"
    chat_model: str = "gpt-4o-mini"
    chat_timeout_seconds: float = 20.0

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.frontend_urls.split(",") if o.strip()]

    @property
    def cloudinary_configured(self) -> bool:
        return bool(self.cloudinary_cloud_name and self.cloudinary_api_key and self.cloudinary_api_secret)

    class Config:
        env_file = str(_env_path)
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
