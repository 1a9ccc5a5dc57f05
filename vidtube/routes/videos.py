"""
Video Routes
"""
import logging
from fastapi import APIRouter, Depends, Query, Form, File, UploadFile
from typing import Optional

from vidtube.models.common import DeletedResponse
from vidtube.models.video import VideoResponse, VideoListResponse
from vidtube.services.video_service import get_video_service
from vidtube.routes.auth import get_current_user_id, get_current_user_id_optional
from vidtube.routes.common import unwrap, read_upload

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=VideoListResponse)
async def list_videos(
    viewer_id: Optional[str] = Depends(get_current_user_id_optional),
    page: Optional[str] = Query(None, description="Page number"),
    limit: Optional[str] = Query(None, description="Items per page"),
    user_id: Optional[str] = Query(None, alias="userId", description="Filter by channel"),
    query: Optional[str] = Query(None, description="Title search")
):
    """
    List published videos, newest first.

    A channel owner listing their own channel also sees unpublished videos.
    """
    result = unwrap(await get_video_service().list_videos(
        viewer_id=viewer_id,
        page=page,
        limit=limit,
        owner_id=user_id,
        query=query
    ))

    return VideoListResponse(videos=result["videos"], pagination=result["pagination"])


@router.post("", response_model=VideoResponse, status_code=201)
async def publish_video(
    user_id: str = Depends(get_current_user_id),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    video_file: Optional[UploadFile] = File(None, alias="videoFile"),
    thumbnail: Optional[UploadFile] = File(None)
):
    """
    Publish a new video.

    This will:
    1. Upload the video and thumbnail to the media store
    2. Store video metadata in the database
    """
    result = unwrap(await get_video_service().publish_video(
        owner_id=user_id,
        title=title,
        description=description,
        video_file=await read_upload(video_file),
        thumbnail_file=await read_upload(thumbnail)
    ))

    return VideoResponse(**result["video"])


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(
    video_id: str,
    viewer_id: Optional[str] = Depends(get_current_user_id_optional)
):
    """Video detail with the owner's subscriber stats"""
    result = unwrap(await get_video_service().get_video(video_id, viewer_id))
    return VideoResponse(**result["video"])


@router.patch("/{video_id}", response_model=VideoResponse)
async def update_video(
    video_id: str,
    user_id: str = Depends(get_current_user_id),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None)
):
    """Update title, description and/or thumbnail"""
    result = unwrap(await get_video_service().update_video(
        video_id,
        user_id,
        title=title,
        description=description,
        thumbnail_file=await read_upload(thumbnail)
    ))

    return VideoResponse(**result["video"])


@router.delete("/{video_id}", response_model=DeletedResponse)
async def delete_video(
    video_id: str,
    user_id: str = Depends(get_current_user_id)
):
    """Delete a video with its comments, likes and playlist entries"""
    result = unwrap(await get_video_service().delete_video(video_id, user_id))
    return DeletedResponse(id=result["video_id"])


@router.patch("/{video_id}/toggle-publish", response_model=VideoResponse)
async def toggle_publish_status(
    video_id: str,
    user_id: str = Depends(get_current_user_id)
):
    """Publish or unpublish a video"""
    result = unwrap(await get_video_service().toggle_publish_status(video_id, user_id))
    return VideoResponse(**result["video"])
