"""Dependency injection utilities."""
from collections.abc import Generator
import logging
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from .domain.policy import ANONYMOUS, CallerIdentity
from .infra.auth import decode_claims, identity_from_claims
from .infra.db import get_session
from .settings import Settings, get_settings

logger = logging.getLogger("meridian.auth")

bearer = HTTPBearer(auto_error=False)


def db_session() -> Generator[Session, None, None]:
    """Provide a scoped DB session to FastAPI endpoints."""
    with get_session() as session:
        yield session


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def verify_token(token: str, settings: Settings) -> CallerIdentity:
    try:
        claims = decode_claims(token, settings)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except jwt.PyJWTError as exc:
        logger.info("rejected token: %s", exc)
        raise _unauthorized("Invalid token")
    return identity_from_claims(claims)


def optional_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    settings: Settings = Depends(get_settings),
) -> CallerIdentity:
    """Caller identity for routes open to anonymous callers.

    A missing or untrusted token means the caller is anonymous.
    """
    if credentials is None:
        return ANONYMOUS
    try:
        return verify_token(credentials.credentials, settings)
    except HTTPException:
        return ANONYMOUS


def require_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    settings: Settings = Depends(get_settings),
) -> CallerIdentity:
    if credentials is None:
        raise _unauthorized("Missing bearer token")
    return verify_token(credentials.credentials, settings)
