"""
User Service

Public channel profiles. Credentials and token issuance belong to the
external identity provider; this service only records the profile a
verified identity publishes under.
"""
import logging
from typing import Dict, Any, Optional, TYPE_CHECKING

from vidtube.errors import NotFoundError
from vidtube.services.database_service import USERNAME_MAX_LENGTH, FULL_NAME_MAX_LENGTH
from vidtube.services.results import service_operation, require_text, optional_viewer

if TYPE_CHECKING:
    from vidtube.services.database_service import DatabaseService

logger = logging.getLogger(__name__)


class UserService:
    """Service for user profiles"""

    def __init__(self):
        self.db: Optional["DatabaseService"] = None
        logger.info("User service initialized")

    def set_database(self, db: "DatabaseService"):
        """Inject database service"""
        self.db = db
        logger.info("Database service injected into User service")

    @service_operation("creating user")
    async def create_user(
        self,
        username: Optional[str],
        full_name: Optional[str],
        avatar: Optional[str] = None,
        bio: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Create a user profile.

        Usernames are stored lowercase; a taken username is a ConflictError.
        """
        username = require_text(
            username, "Username is required", max_length=USERNAME_MAX_LENGTH, label="Username"
        ).lower()
        full_name = require_text(
            full_name, "Full name is required", max_length=FULL_NAME_MAX_LENGTH, label="Full name"
        )

        user = await self.db.create_user(username, full_name, avatar=avatar, bio=bio)
        logger.info(f"Created user {user['id']} ({username})")
        return {"user": user}

    @service_operation("getting channel profile")
    async def get_channel_profile(self, username: str, viewer_id: Optional[str] = None) -> Dict[str, Any]:
        """Public profile plus subscriber stats, relative to the viewer"""
        username = require_text(username, "Username is required").lower()
        viewer = optional_viewer(viewer_id)

        user = await self.db.get_user_by_username(username)
        if not user:
            raise NotFoundError("Channel does not exist")

        stats = await self.db.get_channel_stats(user["id"], viewer)
        return {"channel": {**user, **stats}}


# Singleton instance
_user_service: Optional[UserService] = None


def get_user_service() -> UserService:
    """Get or create User service singleton"""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service
