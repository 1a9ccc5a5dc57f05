"""
Subscription Models
"""
from typing import Optional, List
from datetime import datetime

from vidtube.models.common import CamelModel, Pagination


class SubscriptionProfile(CamelModel):
    """Public profile of a subscriber or subscribed channel"""
    id: str
    username: str
    full_name: str
    avatar: Optional[str] = None
    subscribed_at: Optional[datetime] = None


class SubscriberListResponse(CamelModel):
    subscribers: List[SubscriptionProfile]
    pagination: Pagination


class SubscribedChannelListResponse(CamelModel):
    channels: List[SubscriptionProfile]
    pagination: Pagination


class SubscriptionToggleResponse(CamelModel):
    state: bool
    subscribers_count: int
