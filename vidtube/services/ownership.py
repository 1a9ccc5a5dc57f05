"""
Ownership checks for owner-scoped entities (videos, comments, tweets, playlists).

Pure functions over already-loaded entity dicts; no storage access.
"""
from typing import Any, Dict, Optional

from vidtube.errors import AuthorizationError


def authorize(entity: Dict[str, Any], caller_id: Optional[str]) -> bool:
    """True iff an identified caller owns the entity"""
    if not caller_id:
        return False
    owner_id = entity.get("owner_id")
    return owner_id is not None and str(owner_id) == str(caller_id)


def require_owner(entity: Dict[str, Any], caller_id: Optional[str], kind: str) -> None:
    """Raise AuthorizationError unless the caller owns the entity"""
    if not caller_id:
        raise AuthorizationError("Authentication required")
    if not authorize(entity, caller_id):
        raise AuthorizationError(f"You are not authorized to modify this {kind}")
