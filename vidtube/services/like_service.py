"""
Like Service

A like is an edge (liker, kind, target). Toggling removes the edge when
present and inserts it otherwise; each side is one conditional write, so
two concurrent toggles can never leave a duplicate edge behind.
"""
import logging
from typing import Dict, Any, Optional, TYPE_CHECKING

from sqlalchemy import select, or_

from vidtube.errors import ValidationError, NotFoundError, ConflictError
from vidtube.models.like import LikeTarget
from vidtube.services import pagination
from vidtube.services.database_service import LikeModel, VideoModel, as_uuid
from vidtube.services.results import (
    service_operation, require_id, require_caller, require_visible_video
)
from vidtube.services.view_composer import ViewComposer, VIDEO_VIEW

if TYPE_CHECKING:
    from vidtube.services.database_service import DatabaseService

logger = logging.getLogger(__name__)


class LikeService:
    """Service for like toggling and liked-video listings"""

    def __init__(self):
        self.db: Optional["DatabaseService"] = None
        self.composer: Optional[ViewComposer] = None
        logger.info("Like service initialized")

    def set_database(self, db: "DatabaseService"):
        """Inject database service"""
        self.db = db
        self.composer = ViewComposer(db)
        logger.info("Database service injected into Like service")

    async def _require_visible_target(self, kind: LikeTarget, target_id: str, caller: str):
        # Videos, and comments under them, are hidden from everyone but the
        # owner while unpublished
        if kind == LikeTarget.VIDEO:
            await require_visible_video(self.db, target_id, caller)
        elif kind == LikeTarget.COMMENT:
            comment = await self.db.get_comment(target_id)
            if not comment:
                raise NotFoundError("Comment not found")
            await require_visible_video(self.db, comment["video_id"], caller)
        elif not await self.db.target_exists(kind, target_id):
            raise NotFoundError(f"{kind.value.capitalize()} not found")

    @service_operation("toggling like")
    async def toggle_like(
        self,
        caller_id: Optional[str],
        target_kind: Any,
        target_id: str
    ) -> Dict[str, Any]:
        """
        Toggle the caller's like on a video, comment or tweet.

        Args:
            caller_id: Liker
            target_kind: "video", "comment" or "tweet"
            target_id: Liked entity

        Returns:
            Dict with ``state`` (True when the caller now likes the target)
            and the target's ``like_count`` after the toggle
        """
        caller = require_caller(caller_id)
        try:
            kind = LikeTarget(target_kind)
        except ValueError:
            raise ValidationError(f"Invalid like target '{target_kind}'")
        target_id = require_id(target_id, kind.value)

        await self._require_visible_target(kind, target_id, caller)

        if await self.db.delete_like(caller, kind, target_id):
            state = False
        else:
            try:
                await self.db.insert_like(caller, kind, target_id)
            except ConflictError:
                # A concurrent toggle inserted the same edge first
                logger.info(f"Concurrent like on {kind.value} {target_id} by {caller}")
            state = True

        return {
            "state": state,
            "like_count": await self.db.count_likes(kind, target_id)
        }

    @service_operation("listing liked videos")
    async def list_liked_videos(
        self,
        caller_id: Optional[str],
        page: Any = None,
        limit: Any = None
    ) -> Dict[str, Any]:
        """Composed videos the caller has liked, newest video first"""
        page, limit = pagination.normalize(page, limit)
        caller = require_caller(caller_id)

        liked_ids = select(LikeModel.target_id).where(
            LikeModel.liker_id == as_uuid(caller),
            LikeModel.target_kind == LikeTarget.VIDEO.value
        )
        filters = [
            VideoModel.id.in_(liked_ids),
            or_(VideoModel.is_published.is_(True), VideoModel.owner_id == as_uuid(caller)),
        ]

        result = await self.composer.list_items(VIDEO_VIEW, filters, caller, page, limit)

        return {
            "videos": result["items"],
            "pagination": pagination.build_pagination(result["total"], page, limit)
        }


# Singleton instance
_like_service: Optional[LikeService] = None


def get_like_service() -> LikeService:
    """Get or create Like service singleton"""
    global _like_service
    if _like_service is None:
        _like_service = LikeService()
    return _like_service
