"""
Supabase Auth access tokens (HS256, signed with the project's JWT secret).
"""
import logging
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from jewelbox.config import settings

logger = logging.getLogger(__name__)

CLAIM_SUB = "sub"
CLAIM_EMAIL = "email"


def decode_supabase_token(token: str) -> Optional[dict]:
    """Decode and verify a Supabase JWT. Returns payload or None."""
    secret = settings.SUPABASE_JWT_SECRET or ""
    if not secret or not token:
        return None
    try:
        # Supabase sets aud="authenticated"; issuer is the project URL
        return jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_iss": False, "verify_aud": False},
        )
    except JWTError as e:
        logger.debug("Rejected token: %s", e)
        return None


def principal_from_token(token: str) -> Optional[UUID]:
    """sub claim of a valid token as a UUID; None if the token or claim is invalid."""
    payload = decode_supabase_token(token)
    if not payload or not payload.get(CLAIM_SUB):
        return None
    try:
        return UUID(str(payload[CLAIM_SUB]))
    except (ValueError, TypeError):
        return None
