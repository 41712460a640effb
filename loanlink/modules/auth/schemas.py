from pydantic import BaseModel, ConfigDict, EmailStr
from typing import Optional


class TokenRequest(BaseModel):
    """Identity claims to sign; extra profile claims are carried through"""
    model_config = ConfigDict(extra="allow")

    email: EmailStr


class TokenResponse(BaseModel):
    success: bool = True
    token: Optional[str] = None


class LogoutResponse(BaseModel):
    success: bool = True
