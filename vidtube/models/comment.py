"""
Comment Models
"""
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from vidtube.models.common import CamelModel, OwnerProfile, Pagination


class CommentContent(BaseModel):
    """Request body for adding or editing a comment"""
    content: Optional[str] = None


class CommentResponse(CamelModel):
    id: str
    video_id: str
    owner_id: str
    content: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    owner: Optional[OwnerProfile] = None
    like_count: int = 0
    viewer_has_liked: bool = False


class CommentListResponse(CamelModel):
    comments: List[CommentResponse]
    pagination: Pagination
