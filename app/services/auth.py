"""Auth service (JWT, password hashing, admin seed)."""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from email_validator import EmailNotValidError, validate_email
from sqlalchemy.orm import Session

from app.config import Settings
from app.exceptions import AccountNotFoundError, Forbidden, InvalidCredentialError, Unauthenticated
from app.models.account import Account

log = logging.getLogger("uvicorn.error")


def _pwd_bytes(password: str, max_len: int = 72) -> bytes:
    return password.encode("utf-8")[:max_len]


def verify_password(plain: str, hashed: str) -> bool:
    # bcrypt.checkpw compares digests in constant time
    try:
        return bcrypt.checkpw(_pwd_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(_pwd_bytes(password), bcrypt.gensalt()).decode("utf-8")


def normalize_email(email: str) -> str:
    """Normalize the way EmailStr does on login (lower-cased domain), so stored and submitted emails compare equal."""
    email = (email or "").strip()
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError:
        return email


@dataclass(frozen=True)
class AuthConfig:
    secret_key: str
    algorithm: str = "HS256"
    expire_minutes: int = 60

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthConfig":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.jwt_access_token_expire_minutes,
        )


class AuthService:
    """Issues and verifies the dashboard's bearer tokens.

    Tokens carry the account email as their only identifying claim and expire
    ``config.expire_minutes`` after issuance.
    """

    def __init__(self, config: AuthConfig):
        self.config = config

    def create_access_token(self, email: str, now: datetime | None = None) -> str:
        issued = now or datetime.now(timezone.utc)
        payload = {
            "email": email,
            "iat": issued,
            "exp": issued + timedelta(minutes=self.config.expire_minutes),
        }
        return jwt.encode(payload, self.config.secret_key, algorithm=self.config.algorithm)

    def issue_credential(self, db: Session, email: str, password: str) -> str:
        account = db.query(Account).filter(Account.email == normalize_email(email)).first()
        if not account:
            raise AccountNotFoundError()
        if not verify_password(password, account.hashed_password):
            raise InvalidCredentialError()
        return self.create_access_token(account.email)

    def verify_credential(self, token: str | None) -> str:
        """Return the account email the token was issued to."""
        token = (token or "").strip()
        if not token:
            raise Unauthenticated()
        try:
            payload = jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[self.config.algorithm],
                options={"require": ["exp", "email"]},
            )
        except jwt.ExpiredSignatureError:
            raise Forbidden("Token expired")
        except jwt.PyJWTError:
            raise Forbidden("Invalid token")
        email = payload.get("email")
        if not isinstance(email, str) or not email:
            raise Forbidden("Invalid token")
        return email


def seed_admin(db: Session, email: str, password: str) -> Account | None:
    """Create the dashboard account on first boot. Returns the new account, or None if it already exists."""
    email = normalize_email(email)
    if db.query(Account).filter(Account.email == email).first():
        return None
    account = Account(email=email, hashed_password=get_password_hash(password))
    db.add(account)
    db.commit()
    db.refresh(account)
    log.info("[Seed] Admin account created: %s", email)
    return account
