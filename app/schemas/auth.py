"""Auth schemas."""
from pydantic import BaseModel, EmailStr


class AccountLogin(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    token: str
