"""
Identity dependencies

Tokens are issued by the external identity provider; this module only
verifies them and extracts the caller id from the ``sub`` claim.
"""
import logging
from fastapi import HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from typing import Optional

from vidtube.settings import get_settings

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_user_id_from_token(token: str) -> Optional[str]:
    """
    Verify a bearer JWT and return its subject.

    Args:
        token: JWT token string

    Returns:
        The ``sub`` claim if the token is valid, None otherwise
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError as e:
        logger.warning(f"Token verification failed: {e}")
        return None

    return payload.get("sub")


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """Caller id for protected routes; 401 without a valid token"""
    if not credentials:
        raise HTTPException(status_code=401, detail="Authentication required")

    user_id = get_user_id_from_token(credentials.credentials)
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return user_id


async def get_current_user_id_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """
    Caller id for read routes.

    Anonymous callers get None; a token that is present but invalid is
    still rejected.
    """
    if not credentials:
        return None

    user_id = get_user_id_from_token(credentials.credentials)
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return user_id
