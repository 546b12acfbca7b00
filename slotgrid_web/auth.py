"""Authentication utilities for the admin endpoints.

A single administrator is configured through the environment.  Successful
logins receive a signed, time-limited JWT that is also set as an HttpOnly
cookie.  Nothing is stored server-side, so a token stays valid until it
expires even after logout.
"""

from __future__ import annotations

import datetime as dt
import hmac
import os
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from slotgrid.errors import Unauthorized

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ADMIN_USER = os.getenv("SLOTGRID_ADMIN_USER", "admin")
ADMIN_PASSWORD = os.getenv("SLOTGRID_ADMIN_PASSWORD", "password")
ADMIN_PASSWORD_HASH = os.getenv("SLOTGRID_ADMIN_PASSWORD_HASH", "")

SECRET_KEY = os.getenv("SLOTGRID_SECRET_KEY", os.getenv("SECRET_KEY", "change-me"))
ALGORITHM = os.getenv("SLOTGRID_JWT_ALGORITHM", "HS256")
TOKEN_MAX_AGE_MINUTES = int(os.getenv("SLOTGRID_TOKEN_MAX_AGE_MINUTES", str(24 * 60)))

COOKIE_NAME = "admin_token"
COOKIE_SECURE = os.getenv("SLOTGRID_COOKIE_SECURE", "0").lower() in {"1", "true", "yes"}

oauth2_optional_scheme = OAuth2PasswordBearer(tokenUrl="/admin/login", auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def authenticate_admin(username: str | None, password: str | None) -> bool:
    """Return ``True`` when the credentials match the configured admin."""

    if not username or password is None:
        return False
    if not hmac.compare_digest(username.encode(), ADMIN_USER.encode()):
        return False
    if ADMIN_PASSWORD_HASH:
        return verify_password(password, ADMIN_PASSWORD_HASH)
    return hmac.compare_digest(password.encode(), ADMIN_PASSWORD.encode())


def create_access_token(subject: str, expires_delta: Optional[dt.timedelta] = None) -> str:
    expire = dt.datetime.now(dt.timezone.utc) + (
        expires_delta or dt.timedelta(minutes=TOKEN_MAX_AGE_MINUTES)
    )
    return jwt.encode({"sub": subject, "exp": expire}, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str | None) -> str:
    """Return the admin identity bound to ``token``.

    Raises :class:`Unauthorized` for a missing token, a bad signature, an
    expired token or a subject other than the configured admin.
    """

    if not token:
        raise Unauthorized("unauthorized")
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise Unauthorized("unauthorized") from exc
    subject = payload.get("sub")
    if subject is None or subject != ADMIN_USER:
        raise Unauthorized("unauthorized")
    return subject


async def require_admin(
    request: Request, token: str | None = Depends(oauth2_optional_scheme)
) -> str:
    """FastAPI dependency guarding every mutation endpoint."""

    return verify_token(token or request.cookies.get(COOKIE_NAME))
