"""
Tweet Models
"""
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from vidtube.models.common import CamelModel, OwnerProfile, Pagination


class TweetContent(BaseModel):
    """Request body for posting or editing a tweet"""
    content: Optional[str] = None


class TweetResponse(CamelModel):
    id: str
    owner_id: str
    content: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    owner: Optional[OwnerProfile] = None
    like_count: int = 0
    viewer_has_liked: bool = False


class TweetListResponse(CamelModel):
    tweets: List[TweetResponse]
    pagination: Pagination
