"""Optional bearer-token verification against an external identity provider."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Header, HTTPException, status

from settings import Settings, get_settings

logger = logging.getLogger(__name__)


class TokenVerificationError(RuntimeError):
    pass


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_bearer_token(authorization: Optional[str]) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise _unauthorized("Missing Authorization header.")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise _unauthorized("Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise _unauthorized("Authorization must be: Bearer <token>.")
    return token


@lru_cache
def _jwks_client(jwks_url: str) -> jwt.PyJWKClient:
    return jwt.PyJWKClient(jwks_url)


def decode_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Verify signature, audience and issuer of ``token`` and return its claims."""
    try:
        signing_key = _jwks_client(settings.auth_jwks_url).get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            audience=settings.auth_audience,
            issuer=settings.auth_issuer,
        )
    except jwt.PyJWTError as exc:
        raise TokenVerificationError(str(exc)) from exc


def get_settings_dependency() -> Settings:
    return get_settings()


def get_current_identity(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings_dependency),
) -> Optional[Dict[str, Any]]:
    """Return the verified token claims, or ``None`` when auth is disabled."""
    if not settings.auth_enabled:
        return None

    token = extract_bearer_token(authorization)
    try:
        claims = decode_token(token, settings)
    except TokenVerificationError as exc:
        logger.warning("Rejected bearer token", extra={"reason": str(exc)})
        raise _unauthorized("Invalid access token.") from exc
    logger.debug("Authenticated request", extra={"subject": claims.get("sub")})
    return claims
