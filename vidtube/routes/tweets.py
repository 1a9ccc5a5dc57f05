"""
Tweet Routes
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from vidtube.models.common import DeletedResponse
from vidtube.models.tweet import TweetContent, TweetResponse, TweetListResponse
from vidtube.services.tweet_service import get_tweet_service
from vidtube.routes.auth import get_current_user_id, get_current_user_id_optional
from vidtube.routes.common import unwrap

router = APIRouter()


@router.post("", response_model=TweetResponse, status_code=201)
async def create_tweet(
    body: TweetContent,
    user_id: str = Depends(get_current_user_id)
):
    result = unwrap(await get_tweet_service().create_tweet(user_id, body.content))
    return TweetResponse(**result["tweet"])


@router.get("", response_model=TweetListResponse)
async def list_tweets(
    viewer_id: Optional[str] = Depends(get_current_user_id_optional),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    """Global tweet feed, newest first"""
    result = unwrap(await get_tweet_service().list_tweets(viewer_id, page, limit))
    return TweetListResponse(tweets=result["tweets"], pagination=result["pagination"])


@router.get("/user/{user_id}", response_model=TweetListResponse)
async def list_user_tweets(
    user_id: str,
    viewer_id: Optional[str] = Depends(get_current_user_id_optional),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None)
):
    """A user's tweets, newest first"""
    result = unwrap(await get_tweet_service().list_tweets(viewer_id, page, limit, owner_id=user_id))
    return TweetListResponse(tweets=result["tweets"], pagination=result["pagination"])


@router.patch("/{tweet_id}", response_model=TweetResponse)
async def update_tweet(
    tweet_id: str,
    body: TweetContent,
    user_id: str = Depends(get_current_user_id)
):
    result = unwrap(await get_tweet_service().update_tweet(tweet_id, user_id, body.content))
    return TweetResponse(**result["tweet"])


@router.delete("/{tweet_id}", response_model=DeletedResponse)
async def delete_tweet(
    tweet_id: str,
    user_id: str = Depends(get_current_user_id)
):
    result = unwrap(await get_tweet_service().delete_tweet(tweet_id, user_id))
    return DeletedResponse(id=result["tweet_id"])
