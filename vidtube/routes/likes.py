"""
Like Routes
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from vidtube.models.like import LikeToggleResponse
from vidtube.models.video import VideoListResponse
from vidtube.services.like_service import get_like_service
from vidtube.routes.auth import get_current_user_id
from vidtube.routes.common import unwrap

router = APIRouter()


@router.post("/toggle/{kind}/{target_id}", response_model=LikeToggleResponse)
async def toggle_like(
    kind: str,
    target_id: str,
    user_id: str = Depends(get_current_user_id)
):
    """Like or unlike a video, comment or tweet"""
    result = unwrap(await get_like_service().toggle_like(user_id, kind, target_id))
    return LikeToggleResponse(state=result["state"], like_count=result["like_count"])


@router.get("/videos", response_model=VideoListResponse)
async def list_liked_videos(
    user_id: str = Depends(get_current_user_id),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    """Videos the caller has liked"""
    result = unwrap(await get_like_service().list_liked_videos(user_id, page, limit))
    return VideoListResponse(videos=result["videos"], pagination=result["pagination"])
