"""
VidTube - Services
"""
from .database_service import DatabaseService
from .media_service import MediaService
from .view_composer import ViewComposer
from .video_service import VideoService
from .comment_service import CommentService
from .tweet_service import TweetService
from .playlist_service import PlaylistService
from .like_service import LikeService
from .subscription_service import SubscriptionService
from .user_service import UserService

__all__ = [
    "DatabaseService",
    "MediaService",
    "ViewComposer",
    "VideoService",
    "CommentService",
    "TweetService",
    "PlaylistService",
    "LikeService",
    "SubscriptionService",
    "UserService"
]
