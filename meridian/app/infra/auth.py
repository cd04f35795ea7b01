"""JWT decoding for bearer tokens issued by the identity provider."""
from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, Iterable, Mapping

import jwt

from ..domain.policy import CallerIdentity
from ..settings import Settings

ROLES_CLAIM = "roles"


def decode_secret(secret: str) -> bytes:
    """Decode a base64 or base64url secret, padding optional."""
    normalized = secret.strip().replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    try:
        return base64.b64decode(normalized, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise jwt.InvalidKeyError("AUTH_SECRET is not valid base64") from exc


def decode_claims(token: str, settings: Settings) -> Dict[str, Any]:
    """Verify signature (and audience when configured) and return the claims.

    Raises:
        jwt.PyJWTError: if the token cannot be trusted.
    """
    if not settings.auth_secret:
        raise jwt.InvalidKeyError("AUTH_SECRET is not configured")
    return jwt.decode(
        token,
        decode_secret(settings.auth_secret),
        algorithms=list(settings.auth_algorithms),
        audience=settings.auth_audience,
        options={"verify_aud": settings.auth_audience is not None},
    )


def _roles(value: Any) -> Iterable[str]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return (str(role) for role in value)


def identity_from_claims(claims: Mapping[str, Any]) -> CallerIdentity:
    subject = claims.get("sub")
    return CallerIdentity(
        is_authenticated=True,
        subject=str(subject) if subject else None,
        roles=frozenset(_roles(claims.get(ROLES_CLAIM))),
    )
