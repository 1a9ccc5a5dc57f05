"""
User Models
"""
from pydantic import Field
from typing import Optional
from datetime import datetime

from vidtube.models.common import CamelModel


class UserCreate(CamelModel):
    """Schema for registering a channel profile"""
    username: str = Field(..., max_length=50)
    full_name: str = Field(..., max_length=100)
    avatar: Optional[str] = None
    bio: Optional[str] = None


class UserResponse(CamelModel):
    """Public user profile"""
    id: str
    username: str
    full_name: str
    avatar: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[datetime] = None


class ChannelProfileResponse(UserResponse):
    """Channel page header, relative to the viewer"""
    subscribers_count: int
    subscribed_to_count: int
    viewer_is_subscribed: bool
