"""
Comment Service

Comments hang off a video. Listing and creation return composed comments
(owner profile, like count, viewer-relative like flag); edits and deletes
are owner-only.
"""
import logging
from typing import Dict, Any, Optional, TYPE_CHECKING

from vidtube.errors import NotFoundError
from vidtube.services import pagination
from vidtube.services.database_service import CommentModel, as_uuid
from vidtube.services.ownership import require_owner
from vidtube.services.results import (
    service_operation, require_id, require_text, require_caller, optional_viewer,
    require_visible_video
)
from vidtube.services.view_composer import ViewComposer, COMMENT_VIEW

if TYPE_CHECKING:
    from vidtube.services.database_service import DatabaseService

logger = logging.getLogger(__name__)


class CommentService:
    """Service for comment operations"""

    def __init__(self):
        self.db: Optional["DatabaseService"] = None
        self.composer: Optional[ViewComposer] = None
        logger.info("Comment service initialized")

    def set_database(self, db: "DatabaseService"):
        """Inject database service"""
        self.db = db
        self.composer = ViewComposer(db)
        logger.info("Database service injected into Comment service")

    async def _require_video(self, video_id: str, viewer_id: Optional[str]) -> str:
        # Unpublished videos and their comments exist only for the owner
        video = await require_visible_video(self.db, video_id, viewer_id)
        return video["id"]

    async def _load_owned(self, comment_id: str, caller_id: Optional[str]) -> Dict[str, Any]:
        caller = require_caller(caller_id)
        comment = await self.db.get_comment(require_id(comment_id, "comment"))
        if not comment:
            raise NotFoundError("Comment not found")
        require_owner(comment, caller, "comment")
        return comment

    @service_operation("listing comments")
    async def list_comments(
        self,
        video_id: str,
        viewer_id: Optional[str] = None,
        page: Any = None,
        limit: Any = None
    ) -> Dict[str, Any]:
        """
        List a video's comments, newest first.

        Args:
            video_id: Video the comments belong to
            viewer_id: Caller (None when anonymous)
            page: Raw page parameter
            limit: Raw limit parameter

        Returns:
            Dict with composed comments and pagination info
        """
        page, limit = pagination.normalize(page, limit)
        viewer = optional_viewer(viewer_id)
        video_id = await self._require_video(video_id, viewer)

        result = await self.composer.list_items(
            COMMENT_VIEW,
            [CommentModel.video_id == as_uuid(video_id)],
            viewer,
            page,
            limit
        )

        return {
            "comments": result["items"],
            "pagination": pagination.build_pagination(result["total"], page, limit)
        }

    @service_operation("adding comment")
    async def add_comment(
        self,
        video_id: str,
        owner_id: Optional[str],
        content: Optional[str]
    ) -> Dict[str, Any]:
        """
        Add a comment to a video.

        Nothing is written when the content is blank or the video is missing.
        """
        owner = require_caller(owner_id)
        content = require_text(content, "Comment content is required")
        video_id = await self._require_video(video_id, owner)

        created = await self.db.create_comment(video_id, owner, content)
        logger.info(f"Comment {created['id']} added to video {video_id}")

        return {"comment": await self.composer.compose_one(COMMENT_VIEW, created, owner)}

    @service_operation("updating comment")
    async def update_comment(
        self,
        comment_id: str,
        caller_id: Optional[str],
        content: Optional[str]
    ) -> Dict[str, Any]:
        """Replace a comment's content (owner only)"""
        content = require_text(content, "Comment content is required")
        comment = await self._load_owned(comment_id, caller_id)

        updated = await self.db.update_comment(comment["id"], content)
        return {"comment": updated}

    @service_operation("deleting comment")
    async def delete_comment(self, comment_id: str, caller_id: Optional[str]) -> Dict[str, Any]:
        """Delete a comment and its likes (owner only)"""
        comment = await self._load_owned(comment_id, caller_id)

        await self.db.delete_comment(comment["id"])
        return {"comment_id": comment["id"]}


# Singleton instance
_comment_service: Optional[CommentService] = None


def get_comment_service() -> CommentService:
    """Get or create Comment service singleton"""
    global _comment_service
    if _comment_service is None:
        _comment_service = CommentService()
    return _comment_service
