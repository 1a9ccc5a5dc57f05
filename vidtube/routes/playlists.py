"""
Playlist Routes
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from vidtube.models.common import DeletedResponse
from vidtube.models.playlist import (
    PlaylistCreate, PlaylistUpdate, PlaylistResponse, PlaylistListResponse
)
from vidtube.services.playlist_service import get_playlist_service
from vidtube.routes.auth import get_current_user_id
from vidtube.routes.common import unwrap

router = APIRouter()


@router.post("", response_model=PlaylistResponse, status_code=201)
async def create_playlist(
    body: PlaylistCreate,
    user_id: str = Depends(get_current_user_id)
):
    result = unwrap(await get_playlist_service().create_playlist(user_id, body.name, body.description))
    return PlaylistResponse(**result["playlist"])


@router.get("/user/{user_id}", response_model=PlaylistListResponse)
async def list_user_playlists(
    user_id: str,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    """A user's playlists with their video counts"""
    result = unwrap(await get_playlist_service().list_user_playlists(user_id, page, limit))
    return PlaylistListResponse(playlists=result["playlists"], pagination=result["pagination"])


@router.get("/{playlist_id}", response_model=PlaylistResponse)
async def get_playlist(playlist_id: str):
    result = unwrap(await get_playlist_service().get_playlist(playlist_id))
    return PlaylistResponse(**result["playlist"])


@router.patch("/{playlist_id}", response_model=PlaylistResponse)
async def update_playlist(
    playlist_id: str,
    body: PlaylistUpdate,
    user_id: str = Depends(get_current_user_id)
):
    result = unwrap(await get_playlist_service().update_playlist(
        playlist_id, user_id, name=body.name, description=body.description
    ))
    return PlaylistResponse(**result["playlist"])


@router.delete("/{playlist_id}", response_model=DeletedResponse)
async def delete_playlist(
    playlist_id: str,
    user_id: str = Depends(get_current_user_id)
):
    result = unwrap(await get_playlist_service().delete_playlist(playlist_id, user_id))
    return DeletedResponse(id=result["playlist_id"])


@router.patch("/{playlist_id}/add/{video_id}", response_model=PlaylistResponse)
async def add_video_to_playlist(
    playlist_id: str,
    video_id: str,
    user_id: str = Depends(get_current_user_id)
):
    """Append a video; adding one that is already there changes nothing"""
    result = unwrap(await get_playlist_service().add_video(playlist_id, video_id, user_id))
    return PlaylistResponse(**result["playlist"])


@router.patch("/{playlist_id}/remove/{video_id}", response_model=PlaylistResponse)
async def remove_video_from_playlist(
    playlist_id: str,
    video_id: str,
    user_id: str = Depends(get_current_user_id)
):
    result = unwrap(await get_playlist_service().remove_video(playlist_id, video_id, user_id))
    return PlaylistResponse(**result["playlist"])
