from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from fastapi import HTTPException, Request, status
from loanlink.core.config import settings
from loanlink.core.exceptions import ConfigurationError

UNAUTHORIZED_DETAIL = "unauthorized access"


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHORIZED_DETAIL,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _require_secret(secret: Optional[str]) -> str:
    secret = secret if secret is not None else settings.ACCESS_TOKEN_SECRET
    if not secret:
        raise ConfigurationError("Token signing secret is not configured")
    return secret


def create_access_token(
    data: Dict[str, Any],
    secret: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign the identity claims; sessions last ACCESS_TOKEN_EXPIRE_MINUTES"""
    key = _require_secret(secret)
    to_encode = data.copy()

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode["exp"] = datetime.now(timezone.utc) + expires_delta

    return jwt.encode(to_encode, key, algorithm=settings.ALGORITHM)


def decode_token(token: str, secret: Optional[str] = None) -> Dict[str, Any]:
    """Decode and validate a session token, returning its claims"""
    key = _require_secret(secret)
    try:
        payload = jwt.decode(token, key, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise _unauthorized()

    if not payload.get("email"):
        raise _unauthorized()
    return payload


def extract_token(request: Request) -> Optional[str]:
    """
    Find the session token on a request.

    The cookie takes precedence over an ``Authorization: Bearer`` header.
    """
    token = request.cookies.get(settings.TOKEN_COOKIE_NAME)
    if token:
        return token

    authorization = request.headers.get("Authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return None


def cookie_options() -> Dict[str, Any]:
    """Cookie attributes; cross-site in production"""
    if settings.is_production:
        return {"httponly": True, "secure": True, "samesite": "none"}
    return {"httponly": True, "secure": False, "samesite": "strict"}
