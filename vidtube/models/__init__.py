"""
VidTube - Data Models
"""
from .common import CamelModel, OwnerProfile, Pagination, DeletedResponse
from .user import UserCreate, UserResponse, ChannelProfileResponse
from .video import VideoResponse, VideoListResponse
from .comment import CommentContent, CommentResponse, CommentListResponse
from .tweet import TweetContent, TweetResponse, TweetListResponse
from .playlist import (
    PlaylistCreate, PlaylistUpdate, PlaylistVideo, PlaylistResponse,
    PlaylistSummary, PlaylistListResponse
)
from .like import LikeTarget, LikeToggleResponse
from .subscription import (
    SubscriptionProfile, SubscriberListResponse, SubscribedChannelListResponse,
    SubscriptionToggleResponse
)

__all__ = [
    "CamelModel", "OwnerProfile", "Pagination", "DeletedResponse",
    "UserCreate", "UserResponse", "ChannelProfileResponse",
    "VideoResponse", "VideoListResponse",
    "CommentContent", "CommentResponse", "CommentListResponse",
    "TweetContent", "TweetResponse", "TweetListResponse",
    "PlaylistCreate", "PlaylistUpdate", "PlaylistVideo", "PlaylistResponse",
    "PlaylistSummary", "PlaylistListResponse",
    "LikeTarget", "LikeToggleResponse",
    "SubscriptionProfile", "SubscriberListResponse", "SubscribedChannelListResponse",
    "SubscriptionToggleResponse"
]
