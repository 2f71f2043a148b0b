"""
Request dependencies: DB session, authenticated principal, blob store.

Auth: Authorization: Bearer <Supabase access token>. The token's sub is the
principal id stamped on created records.
"""
import logging
from uuid import UUID

from fastapi import HTTPException, Request, status

from jewelbox.database import get_db
from jewelbox.services.storage_service import get_blob_store
from jewelbox.utils.auth import principal_from_token

logger = logging.getLogger(__name__)

__all__ = ["get_db", "get_blob_store", "get_current_user"]


def get_current_user(request: Request) -> UUID:
    """
    Require a valid JWT; return the principal id. Raises 401 if no/invalid token.
    """
    auth = request.headers.get("Authorization")
    token = (auth[7:].strip() if auth and auth.startswith("Bearer ") else None) or None
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id = principal_from_token(token)
    if user_id is None:
        logger.info("Rejected request to %s: invalid token", request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
