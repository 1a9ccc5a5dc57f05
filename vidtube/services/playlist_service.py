"""
Playlist Service

Playlists are owner-curated, ordered lists of videos. A video appears at
most once in a playlist; adding it again leaves the playlist unchanged.
"""
import logging
from typing import Dict, Any, Optional, TYPE_CHECKING

from vidtube.errors import ValidationError, NotFoundError, ConflictError
from vidtube.services import pagination
from vidtube.services.database_service import PLAYLIST_NAME_MAX_LENGTH
from vidtube.services.ownership import require_owner
from vidtube.services.results import (
    service_operation, require_id, require_text, require_caller, require_user,
    require_visible_video
)

if TYPE_CHECKING:
    from vidtube.services.database_service import DatabaseService

logger = logging.getLogger(__name__)


class PlaylistService:
    """Service for playlist operations"""

    def __init__(self):
        self.db: Optional["DatabaseService"] = None
        logger.info("Playlist service initialized")

    def set_database(self, db: "DatabaseService"):
        """Inject database service"""
        self.db = db
        logger.info("Database service injected into Playlist service")

    async def _load(self, playlist_id: str) -> Dict[str, Any]:
        playlist = await self.db.get_playlist(require_id(playlist_id, "playlist"))
        if not playlist:
            raise NotFoundError("Playlist not found")
        return playlist

    async def _load_owned(self, playlist_id: str, caller_id: Optional[str]) -> Dict[str, Any]:
        caller = require_caller(caller_id)
        playlist = await self._load(playlist_id)
        require_owner(playlist, caller, "playlist")
        return playlist

    @service_operation("creating playlist")
    async def create_playlist(
        self,
        owner_id: Optional[str],
        name: Optional[str],
        description: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create an empty playlist"""
        owner = require_caller(owner_id)
        name = require_text(
            name, "Playlist name is required", max_length=PLAYLIST_NAME_MAX_LENGTH, label="Playlist name"
        )
        await require_user(self.db, owner)

        playlist = await self.db.create_playlist(owner, name, (description or "").strip())
        logger.info(f"Created playlist {playlist['id']} for user {owner}")
        return {"playlist": playlist}

    @service_operation("listing playlists")
    async def list_user_playlists(
        self,
        user_id: str,
        page: Any = None,
        limit: Any = None
    ) -> Dict[str, Any]:
        """List a user's playlists (each with its video count)"""
        page, limit = pagination.normalize(page, limit)
        user = await require_user(self.db, user_id)

        result = await self.db.list_playlists(
            user["id"], offset=pagination.offset(page, limit), limit=limit
        )

        return {
            "playlists": result["playlists"],
            "pagination": pagination.build_pagination(result["total"], page, limit)
        }

    @service_operation("getting playlist")
    async def get_playlist(self, playlist_id: str) -> Dict[str, Any]:
        """Get a playlist with its videos in order"""
        return {"playlist": await self._load(playlist_id)}

    @service_operation("adding video to playlist")
    async def add_video(
        self,
        playlist_id: str,
        video_id: str,
        caller_id: Optional[str]
    ) -> Dict[str, Any]:
        """Append a video to a playlist (owner only)"""
        playlist = await self._load_owned(playlist_id, caller_id)
        video = await require_visible_video(self.db, video_id, playlist["owner_id"])
        video_id = video["id"]

        try:
            await self.db.add_playlist_video(playlist["id"], video_id)
        except ConflictError:
            logger.info(f"Video {video_id} already in playlist {playlist['id']}")
            return {"playlist": playlist}

        return {"playlist": await self.db.get_playlist(playlist["id"])}

    @service_operation("removing video from playlist")
    async def remove_video(
        self,
        playlist_id: str,
        video_id: str,
        caller_id: Optional[str]
    ) -> Dict[str, Any]:
        """Remove a video from a playlist (owner only)"""
        playlist = await self._load_owned(playlist_id, caller_id)
        video_id = require_id(video_id, "video")

        if not await self.db.remove_playlist_video(playlist["id"], video_id):
            raise NotFoundError("Video is not in the playlist")

        return {"playlist": await self.db.get_playlist(playlist["id"])}

    @service_operation("updating playlist")
    async def update_playlist(
        self,
        playlist_id: str,
        caller_id: Optional[str],
        name: Optional[str] = None,
        description: Optional[str] = None
    ) -> Dict[str, Any]:
        """Rename and/or re-describe a playlist (owner only)"""
        if name is None and description is None:
            raise ValidationError("At least one field is required to update")

        updates = {}
        if name is not None:
            updates["name"] = require_text(
                name, "Playlist name cannot be empty", max_length=PLAYLIST_NAME_MAX_LENGTH, label="Playlist name"
            )
        if description is not None:
            updates["description"] = description.strip()

        playlist = await self._load_owned(playlist_id, caller_id)
        return {"playlist": await self.db.update_playlist(playlist["id"], updates)}

    @service_operation("deleting playlist")
    async def delete_playlist(self, playlist_id: str, caller_id: Optional[str]) -> Dict[str, Any]:
        """Delete a playlist; its videos are untouched (owner only)"""
        playlist = await self._load_owned(playlist_id, caller_id)

        await self.db.delete_playlist(playlist["id"])
        return {"playlist_id": playlist["id"]}


# Singleton instance
_playlist_service: Optional[PlaylistService] = None


def get_playlist_service() -> PlaylistService:
    """Get or create Playlist service singleton"""
    global _playlist_service
    if _playlist_service is None:
        _playlist_service = PlaylistService()
    return _playlist_service
