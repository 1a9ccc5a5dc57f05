"""
Service result helpers

Every public service method returns a tagged dict: ``{"success": True, ...}``
or the failure shape produced by ``ServiceError.to_result()``.
"""
import asyncio
import functools
import logging
import uuid
from typing import Any, Optional

import httpx
from sqlalchemy.exc import SQLAlchemyError

from vidtube.errors import (
    ServiceError, DependencyError, ValidationError, NotFoundError, AuthorizationError
)
from vidtube.services.ownership import authorize


def service_operation(action: str):
    """
    Wrap an async service method so that it never raises past its boundary.

    The wrapped method returns its success payload as a dict; classified
    errors become failed results and infrastructure failures become
    DependencyError results (logged at error level).
    """
    def decorator(func):
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            if not self.db:
                return DependencyError("Database service not available").to_result()

            try:
                payload = await func(self, *args, **kwargs)
            except DependencyError as e:
                logger.error(f"Error {action}: {e.message}")
                return e.to_result()
            except ServiceError as e:
                return e.to_result()
            except (SQLAlchemyError, httpx.HTTPError, OSError, asyncio.TimeoutError) as e:
                logger.error(f"Error {action}: {e}")
                return DependencyError(f"Storage unavailable while {action}").to_result()
            except Exception as e:
                logger.error(f"Unexpected error {action}: {e}")
                return DependencyError(f"Unexpected error while {action}").to_result()

            return {"success": True, **payload}

        return wrapper
    return decorator


def require_id(value: Any, label: str) -> str:
    """Validate an opaque identifier and return its canonical string form"""
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError(f"Invalid {label} ID")


def require_text(
    value: Optional[str],
    message: str,
    max_length: Optional[int] = None,
    label: str = "Text"
) -> str:
    """Reject missing or whitespace-only text, and text longer than its column"""
    if value is None or not str(value).strip():
        raise ValidationError(message)
    text = str(value).strip()
    if max_length is not None and len(text) > max_length:
        raise ValidationError(f"{label} must be at most {max_length} characters")
    return text


def require_caller(caller_id: Optional[str]) -> str:
    """Identity is required; anonymous callers are refused"""
    if not caller_id:
        raise AuthorizationError("Authentication required")
    return require_id(caller_id, "user")


async def require_user(db, user_id: str) -> dict:
    """Load a user or raise NotFoundError"""
    user = await db.get_user(require_id(user_id, "user"))
    if not user:
        raise NotFoundError("User not found")
    return user


def optional_viewer(viewer_id: Optional[str]) -> Optional[str]:
    """Canonical viewer id, or None for anonymous callers"""
    return require_id(viewer_id, "user") if viewer_id else None


async def require_visible_video(db, video_id: str, viewer_id: Optional[str]) -> dict:
    """
    Load a video the viewer may see.

    Unpublished videos exist only for their owner; everyone else gets the
    same NotFoundError as for a missing video.
    """
    video = await db.get_video(require_id(video_id, "video"))
    if not video or (not video["is_published"] and not authorize(video, viewer_id)):
        raise NotFoundError("Video not found")
    return video
