"""
Video Service

Handles video operations including:
- Publishing videos (media upload + metadata row, never one without the other)
- Composed listings and detail views
- Owner-only updates, publish toggling and cascading deletes
"""
import logging
from typing import Dict, Any, List, Optional, Tuple, TYPE_CHECKING

from vidtube.errors import ValidationError, NotFoundError, DependencyError
from vidtube.services import pagination
from vidtube.services.database_service import VideoModel, TITLE_MAX_LENGTH, as_uuid
from vidtube.services.media_service import MediaUpload, get_media_service
from vidtube.services.ownership import authorize, require_owner
from vidtube.services.results import (
    service_operation, require_id, require_text, require_caller, require_user, optional_viewer
)
from vidtube.services.view_composer import ViewComposer, VIDEO_VIEW

if TYPE_CHECKING:
    from vidtube.services.database_service import DatabaseService

logger = logging.getLogger(__name__)


class VideoService:
    """Service for video operations"""

    def __init__(self):
        """Initialize Video service"""
        self.media = get_media_service()
        self.db: Optional["DatabaseService"] = None
        self.composer: Optional[ViewComposer] = None

        logger.info("Video service initialized")

    def set_database(self, db: "DatabaseService"):
        """Inject database service"""
        self.db = db
        self.composer = ViewComposer(db)
        logger.info("Database service injected into Video service")

    async def _discard_media(self, blobs: List[Tuple[str, str]]):
        """Best-effort removal of blobs that no longer back a video row"""
        for url, resource_type in blobs:
            try:
                await self.media.delete(url, resource_type)
            except DependencyError as e:
                logger.warning(f"Could not remove media {url}: {e.message}")

    async def _load_owned(self, video_id: str, caller_id: Optional[str]) -> Dict[str, Any]:
        caller = require_caller(caller_id)
        video = await self.db.get_video(require_id(video_id, "video"))
        if not video:
            raise NotFoundError("Video not found")
        require_owner(video, caller, "video")
        return video

    @service_operation("listing videos")
    async def list_videos(
        self,
        viewer_id: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
        owner_id: Optional[str] = None,
        query: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        List videos, newest first.

        Args:
            viewer_id: Caller (None when anonymous)
            page: Raw page parameter
            limit: Raw limit parameter
            owner_id: Optional channel filter
            query: Optional case-insensitive title search

        Returns:
            Dict with composed videos and pagination info
        """
        page, limit = pagination.normalize(page, limit)
        viewer = optional_viewer(viewer_id)

        filters = []
        if owner_id:
            owner_id = require_id(owner_id, "user")
            filters.append(VideoModel.owner_id == as_uuid(owner_id))

        # Owners browsing their own channel also see unpublished videos
        if not (owner_id and owner_id == viewer):
            filters.append(VideoModel.is_published.is_(True))

        if query and query.strip():
            filters.append(VideoModel.title.icontains(query.strip(), autoescape=True))

        result = await self.composer.list_items(VIDEO_VIEW, filters, viewer, page, limit)

        return {
            "videos": result["items"],
            "pagination": pagination.build_pagination(result["total"], page, limit)
        }

    @service_operation("getting video")
    async def get_video(self, video_id: str, viewer_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Get a video with its owner's channel stats.

        Unpublished videos are only visible to their owner.
        """
        viewer = optional_viewer(viewer_id)
        video = await self.composer.get_item(VIDEO_VIEW, require_id(video_id, "video"), viewer)

        if not video or (not video["is_published"] and not authorize(video, viewer)):
            raise NotFoundError("Video does not exist")

        return {"video": video}

    @service_operation("publishing video")
    async def publish_video(
        self,
        owner_id: Optional[str],
        title: Optional[str],
        description: Optional[str],
        video_file: Optional[MediaUpload],
        thumbnail_file: Optional[MediaUpload]
    ) -> Dict[str, Any]:
        """
        Publish a new video.

        This method:
        1. Validates the input
        2. Uploads video and thumbnail to the media store
        3. Stores the video row

        Uploaded blobs are removed again if any later step fails, so a
        video row never exists without its media and vice versa.
        """
        owner = require_caller(owner_id)
        title = require_text(
            title, "Title is required and cannot be empty", max_length=TITLE_MAX_LENGTH, label="Title"
        )
        description = require_text(description, "Description is required and cannot be empty")
        if not video_file or not video_file.content:
            raise ValidationError("Video file is required")
        if not thumbnail_file or not thumbnail_file.content:
            raise ValidationError("Thumbnail file is required")

        await require_user(self.db, owner)

        uploaded: List[Tuple[str, str]] = []
        try:
            video_media = await self.media.upload(video_file, resource_type="video")
            uploaded.append((video_media["url"], "video"))
            thumbnail_media = await self.media.upload(thumbnail_file, resource_type="image")
            uploaded.append((thumbnail_media["url"], "image"))

            created = await self.db.create_video(
                owner_id=owner,
                title=title,
                description=description,
                video_url=video_media["url"],
                thumbnail_url=thumbnail_media["url"],
                duration=video_media["duration"],
                is_published=True
            )
        except Exception:
            await self._discard_media(uploaded)
            raise

        logger.info(f"Published video {created['id']} for user {owner}")

        video = await self.composer.compose_one(VIDEO_VIEW, created, owner)
        return {"video": video}

    @service_operation("updating video")
    async def update_video(
        self,
        video_id: str,
        caller_id: Optional[str],
        title: Optional[str] = None,
        description: Optional[str] = None,
        thumbnail_file: Optional[MediaUpload] = None
    ) -> Dict[str, Any]:
        """Update title, description and/or thumbnail (owner only)"""
        if title is None and description is None and thumbnail_file is None:
            raise ValidationError("At least one field is required to update")

        updates = {}
        if title is not None:
            updates["title"] = require_text(
                title, "Title cannot be empty", max_length=TITLE_MAX_LENGTH, label="Title"
            )
        if description is not None:
            updates["description"] = require_text(description, "Description cannot be empty")

        video = await self._load_owned(video_id, caller_id)

        if thumbnail_file is None:
            updated = await self.db.update_video(video["id"], updates)
            return {"video": updated}

        thumbnail_media = await self.media.upload(thumbnail_file, resource_type="image")
        updates["thumbnail_url"] = thumbnail_media["url"]
        try:
            updated = await self.db.update_video(video["id"], updates)
        except Exception:
            await self._discard_media([(thumbnail_media["url"], "image")])
            raise

        await self._discard_media([(video["thumbnail_url"], "image")])
        return {"video": updated}

    @service_operation("deleting video")
    async def delete_video(self, video_id: str, caller_id: Optional[str]) -> Dict[str, Any]:
        """
        Delete a video (owner only).

        Its likes, comments (and their likes) and playlist entries go with
        it; media blobs are removed afterwards on a best-effort basis.
        """
        video = await self._load_owned(video_id, caller_id)

        await self.db.delete_video(video["id"])
        await self._discard_media([
            (video["video_url"], "video"),
            (video["thumbnail_url"], "image"),
        ])

        logger.info(f"Deleted video {video['id']} for user {caller_id}")
        return {"video_id": video["id"]}

    @service_operation("toggling publish status")
    async def toggle_publish_status(self, video_id: str, caller_id: Optional[str]) -> Dict[str, Any]:
        """Flip a video's published flag (owner only)"""
        video = await self._load_owned(video_id, caller_id)

        updated = await self.db.update_video(video["id"], {"is_published": not video["is_published"]})
        return {"video": updated}


# Singleton instance
_video_service: Optional[VideoService] = None


def get_video_service() -> VideoService:
    """Get or create Video service singleton"""
    global _video_service
    if _video_service is None:
        _video_service = VideoService()
    return _video_service
