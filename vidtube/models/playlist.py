"""
Playlist Models
"""
from pydantic import Field
from typing import Optional, List
from datetime import datetime

from vidtube.models.common import CamelModel, Pagination


class PlaylistCreate(CamelModel):
    """Schema for creating a playlist"""
    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None


class PlaylistUpdate(CamelModel):
    """Schema for renaming a playlist"""
    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None


class PlaylistVideo(CamelModel):
    """Video as projected inside a playlist"""
    id: str
    title: str
    duration: float
    thumbnail_url: str


class PlaylistResponse(CamelModel):
    id: str
    owner_id: str
    name: str
    description: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    videos: List[PlaylistVideo] = []


class PlaylistSummary(CamelModel):
    """Playlist row in a user's playlist listing"""
    id: str
    owner_id: str
    name: str
    description: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    video_count: int = 0


class PlaylistListResponse(CamelModel):
    playlists: List[PlaylistSummary]
    pagination: Pagination
