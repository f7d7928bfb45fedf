"""Dashboard sign-in."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_auth_service
from app.schemas.auth import AccountLogin, Token
from app.services.auth import AuthService

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login", response_model=Token)
def login(
    data: AccountLogin,
    db: Session = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    return Token(token=auth.issue_credential(db, str(data.email), data.password))
