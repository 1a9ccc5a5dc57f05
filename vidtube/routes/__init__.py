"""
VidTube - API Routes
"""
from . import videos, comments, tweets, playlists, likes, subscriptions, users

__all__ = ["videos", "comments", "tweets", "playlists", "likes", "subscriptions", "users"]
