"""
Tweet Service - short text posts on a user's channel
"""
import logging
from typing import Dict, Any, Optional, TYPE_CHECKING

from vidtube.errors import NotFoundError
from vidtube.services import pagination
from vidtube.services.database_service import TweetModel, as_uuid
from vidtube.services.ownership import require_owner
from vidtube.services.results import (
    service_operation, require_id, require_text, require_caller, require_user, optional_viewer
)
from vidtube.services.view_composer import ViewComposer, TWEET_VIEW

if TYPE_CHECKING:
    from vidtube.services.database_service import DatabaseService

logger = logging.getLogger(__name__)


class TweetService:
    """Service for tweet operations"""

    def __init__(self):
        self.db: Optional["DatabaseService"] = None
        self.composer: Optional[ViewComposer] = None
        logger.info("Tweet service initialized")

    def set_database(self, db: "DatabaseService"):
        """Inject database service"""
        self.db = db
        self.composer = ViewComposer(db)
        logger.info("Database service injected into Tweet service")

    async def _load_owned(self, tweet_id: str, caller_id: Optional[str]) -> Dict[str, Any]:
        caller = require_caller(caller_id)
        tweet = await self.db.get_tweet(require_id(tweet_id, "tweet"))
        if not tweet:
            raise NotFoundError("Tweet not found")
        require_owner(tweet, caller, "tweet")
        return tweet

    @service_operation("creating tweet")
    async def create_tweet(self, owner_id: Optional[str], content: Optional[str]) -> Dict[str, Any]:
        """Post a tweet and return it composed"""
        owner = require_caller(owner_id)
        content = require_text(content, "Tweet content is required")
        await require_user(self.db, owner)

        created = await self.db.create_tweet(owner, content)
        return {"tweet": await self.composer.compose_one(TWEET_VIEW, created, owner)}

    @service_operation("listing tweets")
    async def list_tweets(
        self,
        viewer_id: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
        owner_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        List tweets, newest first.

        Without ``owner_id`` this is the global feed; with it, the user must exist.
        """
        page, limit = pagination.normalize(page, limit)

        filters = []
        if owner_id:
            user = await require_user(self.db, owner_id)
            filters.append(TweetModel.owner_id == as_uuid(user["id"]))

        result = await self.composer.list_items(
            TWEET_VIEW, filters, optional_viewer(viewer_id), page, limit
        )

        return {
            "tweets": result["items"],
            "pagination": pagination.build_pagination(result["total"], page, limit)
        }

    @service_operation("updating tweet")
    async def update_tweet(
        self,
        tweet_id: str,
        caller_id: Optional[str],
        content: Optional[str]
    ) -> Dict[str, Any]:
        """Replace a tweet's content (owner only)"""
        content = require_text(content, "Tweet content is required")
        tweet = await self._load_owned(tweet_id, caller_id)

        return {"tweet": await self.db.update_tweet(tweet["id"], content)}

    @service_operation("deleting tweet")
    async def delete_tweet(self, tweet_id: str, caller_id: Optional[str]) -> Dict[str, Any]:
        """Delete a tweet and its likes (owner only)"""
        tweet = await self._load_owned(tweet_id, caller_id)

        await self.db.delete_tweet(tweet["id"])
        logger.info(f"Deleted tweet {tweet['id']}")
        return {"tweet_id": tweet["id"]}


# Singleton instance
_tweet_service: Optional[TweetService] = None


def get_tweet_service() -> TweetService:
    """Get or create Tweet service singleton"""
    global _tweet_service
    if _tweet_service is None:
        _tweet_service = TweetService()
    return _tweet_service
