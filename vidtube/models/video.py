"""
Video Models
"""
from typing import Optional, List
from datetime import datetime

from vidtube.models.common import CamelModel, OwnerProfile, Pagination


class VideoResponse(CamelModel):
    """Composed video: row fields plus owner and like stats"""
    id: str
    owner_id: str
    title: str
    description: str
    video_url: str
    thumbnail_url: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    owner: Optional[OwnerProfile] = None
    like_count: int = 0
    viewer_has_liked: bool = False


class VideoListResponse(CamelModel):
    """Schema for paginated video list"""
    videos: List[VideoResponse]
    pagination: Pagination
