"""Admin session API routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response

from slotgrid.errors import Unauthorized

from .. import auth, schemas

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login", response_model=schemas.Token)
def login(payload: schemas.AdminLogin, response: Response):
    if not auth.authenticate_admin(payload.user, payload.password):
        logger.warning("Rejected admin login for %r", payload.user)
        raise Unauthorized("invalid credentials")
    token = auth.create_access_token(auth.ADMIN_USER)
    response.set_cookie(
        auth.COOKIE_NAME,
        token,
        max_age=auth.TOKEN_MAX_AGE_MINUTES * 60,
        httponly=True,
        secure=auth.COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    return schemas.Token(access_token=token)


@router.post("/logout", response_model=schemas.StatusResponse)
def logout(response: Response):
    # Tokens are stateless; the client simply forgets the cookie.
    response.delete_cookie(auth.COOKIE_NAME, path="/")
    return schemas.StatusResponse()


@router.get("/me", response_model=schemas.AdminRead)
def read_admin(user: str = Depends(auth.require_admin)):
    return schemas.AdminRead(user=user)
