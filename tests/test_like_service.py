"""
Tests for Like Service
"""
import asyncio
import uuid
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio

from vidtube.errors import ConflictError
from vidtube.models.like import LikeTarget
from vidtube.services.like_service import LikeService

from tests.conftest import create_videos


class TestLikeService:
    """Test cases for LikeService"""

    @pytest_asyncio.fixture
    async def like_service(self, db):
        service = LikeService()
        service.set_database(db)
        return service

    @pytest.mark.asyncio
    async def test_single_toggle_leaves_one_edge(self, like_service, db, video, users):
        result = await like_service.toggle_like(users["u2"]["id"], "video", video["id"])

        assert result["success"] is True
        assert result["state"] is True
        assert result["like_count"] == 1
        assert await db.count_likes(LikeTarget.VIDEO, video["id"]) == 1

    @pytest.mark.asyncio
    async def test_double_toggle_returns_to_unliked(self, like_service, db, video, users):
        await like_service.toggle_like(users["u2"]["id"], "video", video["id"])
        result = await like_service.toggle_like(users["u2"]["id"], "video", video["id"])

        assert result["state"] is False
        assert await db.count_likes(LikeTarget.VIDEO, video["id"]) == 0

    @pytest.mark.asyncio
    async def test_tweet_like(self, like_service, db, users):
        tweet = await db.create_tweet(users["u1"]["id"], "hi")

        result = await like_service.toggle_like(users["u2"]["id"], LikeTarget.TWEET, tweet["id"])

        assert result["state"] is True

    @pytest.mark.asyncio
    async def test_invalid_kind(self, like_service, video, users):
        result = await like_service.toggle_like(users["u2"]["id"], "playlist", video["id"])

        assert result["success"] is False
        assert result["error_type"] == "validation"

    @pytest.mark.asyncio
    async def test_missing_target(self, like_service, users):
        result = await like_service.toggle_like(users["u2"]["id"], "comment", str(uuid.uuid4()))

        assert result["error_type"] == "not_found"

    @pytest.mark.asyncio
    async def test_anonymous_toggle(self, like_service, video):
        result = await like_service.toggle_like(None, "video", video["id"])

        assert result["error_type"] == "authorization"

    @pytest.mark.asyncio
    async def test_duplicate_insert_is_a_conflict(self, db, video, users):
        await db.insert_like(users["u2"]["id"], LikeTarget.VIDEO, video["id"])

        with pytest.raises(ConflictError):
            await db.insert_like(users["u2"]["id"], LikeTarget.VIDEO, video["id"])

        assert await db.count_likes(LikeTarget.VIDEO, video["id"]) == 1

    @pytest.mark.asyncio
    async def test_lost_race_reports_liked(self, like_service, db, video, users):
        """A concurrent toggle inserted the edge between our delete and insert"""
        await db.insert_like(users["u2"]["id"], LikeTarget.VIDEO, video["id"])

        with patch.object(db, "delete_like", AsyncMock(return_value=False)):
            result = await like_service.toggle_like(users["u2"]["id"], "video", video["id"])

        assert result["success"] is True
        assert result["state"] is True
        assert await db.count_likes(LikeTarget.VIDEO, video["id"]) == 1

    @pytest.mark.asyncio
    async def test_concurrent_toggles_leave_at_most_one_edge(self, like_service, db, video, users):
        results = await asyncio.gather(
            like_service.toggle_like(users["u2"]["id"], "video", video["id"]),
            like_service.toggle_like(users["u2"]["id"], "video", video["id"]),
        )

        assert all(r["success"] for r in results)
        assert await db.count_likes(LikeTarget.VIDEO, video["id"]) <= 1

    @pytest.mark.asyncio
    async def test_unpublished_video_is_hidden_from_others(self, like_service, db, users, base_time):
        hidden = (await create_videos(db, users["u1"]["id"], 1, base_time, is_published=False))[0]

        other = await like_service.toggle_like(users["u2"]["id"], "video", hidden["id"])
        owner = await like_service.toggle_like(users["u1"]["id"], "video", hidden["id"])

        assert other["error_type"] == "not_found"
        assert owner["state"] is True
        assert await db.count_likes(LikeTarget.VIDEO, hidden["id"]) == 1

    @pytest.mark.asyncio
    async def test_comment_under_unpublished_video_is_hidden(self, like_service, db, users, base_time):
        hidden = (await create_videos(db, users["u1"]["id"], 1, base_time, is_published=False))[0]
        comment = await db.create_comment(hidden["id"], users["u1"]["id"], "draft notes")

        result = await like_service.toggle_like(users["u2"]["id"], "comment", comment["id"])

        assert result["error_type"] == "not_found"
        assert await db.count_likes(LikeTarget.COMMENT, comment["id"]) == 0

    @pytest.mark.asyncio
    async def test_list_liked_videos(self, like_service, db, users, base_time):
        videos = await create_videos(db, users["u1"]["id"], 3, base_time)
        await like_service.toggle_like(users["u2"]["id"], "video", videos[0]["id"])
        await like_service.toggle_like(users["u2"]["id"], "video", videos[2]["id"])

        result = await like_service.list_liked_videos(users["u2"]["id"])

        assert [v["id"] for v in result["videos"]] == [videos[2]["id"], videos[0]["id"]]
        assert all(v["viewer_has_liked"] for v in result["videos"])
        assert result["pagination"]["total_items"] == 2

    @pytest.mark.asyncio
    async def test_list_liked_videos_empty(self, like_service, users):
        result = await like_service.list_liked_videos(users["u1"]["id"])

        assert result["videos"] == []
        assert result["pagination"]["total_pages"] == 0
