"""
Comment Routes
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from vidtube.models.common import DeletedResponse
from vidtube.models.comment import CommentContent, CommentResponse, CommentListResponse
from vidtube.services.comment_service import get_comment_service
from vidtube.routes.auth import get_current_user_id, get_current_user_id_optional
from vidtube.routes.common import unwrap

router = APIRouter()


@router.get("/{video_id}", response_model=CommentListResponse)
async def list_comments(
    video_id: str,
    viewer_id: Optional[str] = Depends(get_current_user_id_optional),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    """Comments on a video, newest first"""
    result = unwrap(await get_comment_service().list_comments(video_id, viewer_id, page, limit))
    return CommentListResponse(comments=result["comments"], pagination=result["pagination"])


@router.post("/{video_id}", response_model=CommentResponse, status_code=201)
async def add_comment(
    video_id: str,
    body: CommentContent,
    user_id: str = Depends(get_current_user_id)
):
    result = unwrap(await get_comment_service().add_comment(video_id, user_id, body.content))
    return CommentResponse(**result["comment"])


@router.patch("/c/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    body: CommentContent,
    user_id: str = Depends(get_current_user_id)
):
    result = unwrap(await get_comment_service().update_comment(comment_id, user_id, body.content))
    return CommentResponse(**result["comment"])


@router.delete("/c/{comment_id}", response_model=DeletedResponse)
async def delete_comment(
    comment_id: str,
    user_id: str = Depends(get_current_user_id)
):
    result = unwrap(await get_comment_service().delete_comment(comment_id, user_id))
    return DeletedResponse(id=result["comment_id"])
