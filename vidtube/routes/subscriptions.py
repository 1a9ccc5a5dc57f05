"""
Subscription Routes
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from vidtube.models.subscription import (
    SubscriberListResponse, SubscribedChannelListResponse, SubscriptionToggleResponse
)
from vidtube.services.subscription_service import get_subscription_service
from vidtube.routes.auth import get_current_user_id
from vidtube.routes.common import unwrap

router = APIRouter()


@router.post("/c/{channel_id}", response_model=SubscriptionToggleResponse)
async def toggle_subscription(
    channel_id: str,
    user_id: str = Depends(get_current_user_id)
):
    """Subscribe to a channel, or unsubscribe if already subscribed"""
    result = unwrap(await get_subscription_service().toggle_subscription(user_id, channel_id))
    return SubscriptionToggleResponse(
        state=result["state"],
        subscribers_count=result["subscribers_count"]
    )


@router.get("/c/{channel_id}", response_model=SubscriberListResponse)
async def list_channel_subscribers(
    channel_id: str,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    result = unwrap(await get_subscription_service().list_channel_subscribers(channel_id, page, limit))
    return SubscriberListResponse(subscribers=result["subscribers"], pagination=result["pagination"])


@router.get("/u/{subscriber_id}", response_model=SubscribedChannelListResponse)
async def list_subscribed_channels(
    subscriber_id: str,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    result = unwrap(await get_subscription_service().list_subscribed_channels(subscriber_id, page, limit))
    return SubscribedChannelListResponse(channels=result["channels"], pagination=result["pagination"])
