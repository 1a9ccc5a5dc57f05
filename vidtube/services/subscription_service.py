"""
Subscription Service - subscriber -> channel edges between users
"""
import logging
from typing import Dict, Any, Optional, TYPE_CHECKING

from vidtube.errors import ValidationError, ConflictError
from vidtube.services import pagination
from vidtube.services.results import service_operation, require_caller, require_user

if TYPE_CHECKING:
    from vidtube.services.database_service import DatabaseService

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Service for subscription toggling and listings"""

    def __init__(self):
        self.db: Optional["DatabaseService"] = None
        logger.info("Subscription service initialized")

    def set_database(self, db: "DatabaseService"):
        """Inject database service"""
        self.db = db
        logger.info("Database service injected into Subscription service")

    @service_operation("toggling subscription")
    async def toggle_subscription(self, subscriber_id: Optional[str], channel_id: str) -> Dict[str, Any]:
        """
        Subscribe to a channel, or unsubscribe if already subscribed.

        Returns:
            Dict with ``state`` and the channel's ``subscribers_count``
        """
        subscriber = require_caller(subscriber_id)
        channel = await require_user(self.db, channel_id)

        if channel["id"] == subscriber:
            raise ValidationError("You cannot subscribe to your own channel")

        if await self.db.delete_subscription(subscriber, channel["id"]):
            state = False
        else:
            try:
                await self.db.insert_subscription(subscriber, channel["id"])
            except ConflictError:
                logger.info(f"Concurrent subscription to {channel['id']} by {subscriber}")
            state = True

        stats = await self.db.get_channel_stats(channel["id"])
        return {"state": state, "subscribers_count": stats["subscribers_count"]}

    @service_operation("listing channel subscribers")
    async def list_channel_subscribers(
        self,
        channel_id: str,
        page: Any = None,
        limit: Any = None
    ) -> Dict[str, Any]:
        """Users subscribed to a channel"""
        page, limit = pagination.normalize(page, limit)
        channel = await require_user(self.db, channel_id)

        result = await self.db.list_channel_subscribers(
            channel["id"], offset=pagination.offset(page, limit), limit=limit
        )
        return {
            "subscribers": result["users"],
            "pagination": pagination.build_pagination(result["total"], page, limit)
        }

    @service_operation("listing subscribed channels")
    async def list_subscribed_channels(
        self,
        subscriber_id: str,
        page: Any = None,
        limit: Any = None
    ) -> Dict[str, Any]:
        """Channels a user is subscribed to"""
        page, limit = pagination.normalize(page, limit)
        subscriber = await require_user(self.db, subscriber_id)

        result = await self.db.list_subscribed_channels(
            subscriber["id"], offset=pagination.offset(page, limit), limit=limit
        )
        return {
            "channels": result["users"],
            "pagination": pagination.build_pagination(result["total"], page, limit)
        }


# Singleton instance
_subscription_service: Optional[SubscriptionService] = None


def get_subscription_service() -> SubscriptionService:
    """Get or create Subscription service singleton"""
    global _subscription_service
    if _subscription_service is None:
        _subscription_service = SubscriptionService()
    return _subscription_service
