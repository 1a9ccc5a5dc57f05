"""
User Routes

Profiles only; sign-in and token issuance happen at the identity provider.
"""
from fastapi import APIRouter, Depends
from typing import Optional

from vidtube.models.user import UserCreate, UserResponse, ChannelProfileResponse
from vidtube.services.user_service import get_user_service
from vidtube.routes.auth import get_current_user_id_optional
from vidtube.routes.common import unwrap

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(body: UserCreate):
    """Register a channel profile"""
    result = unwrap(await get_user_service().create_user(
        username=body.username,
        full_name=body.full_name,
        avatar=body.avatar,
        bio=body.bio
    ))
    return UserResponse(**result["user"])


@router.get("/c/{username}", response_model=ChannelProfileResponse)
async def get_channel_profile(
    username: str,
    viewer_id: Optional[str] = Depends(get_current_user_id_optional)
):
    """Channel header: profile plus subscriber stats"""
    result = unwrap(await get_user_service().get_channel_profile(username, viewer_id))
    return ChannelProfileResponse(**result["channel"])
