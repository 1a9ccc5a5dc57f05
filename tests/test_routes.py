"""
Tests for the HTTP boundary

Runs the FastAPI app in-process through httpx's ASGI transport. The
lifespan is not run; services are pointed at the test database instead.
"""
import uuid

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from jose import jwt

from vidtube.main import app, SERVICE_GETTERS

from tests.conftest import create_videos


def auth_headers(user_id: str) -> dict:
    token = jwt.encode({"sub": user_id}, "test-secret-key-for-testing-only", algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(db):
    for get_service in SERVICE_GETTERS:
        get_service().set_database(db)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestVideoRoutes:

    @pytest.mark.asyncio
    async def test_listing_is_camel_case_and_paginated(self, client, db, users, base_time):
        await create_videos(db, users["u1"]["id"], 15, base_time)

        response = await client.get("/api/videos", params={"page": "2", "limit": "10"})

        assert response.status_code == 200
        body = response.json()
        assert len(body["videos"]) == 5
        assert body["pagination"]["totalPages"] == 2
        assert body["pagination"]["hasPreviousPage"] is True
        first = body["videos"][0]
        assert "likeCount" in first
        assert first["viewerHasLiked"] is False
        assert first["owner"]["fullName"] == "User One"

    @pytest.mark.asyncio
    async def test_non_numeric_paging_is_not_rejected(self, client, video):
        response = await client.get("/api/videos", params={"page": "x", "limit": "-3"})

        assert response.status_code == 200
        assert response.json()["pagination"]["pageSize"] == 1

    @pytest.mark.asyncio
    async def test_missing_video_is_404(self, client, users):
        response = await client.get(f"/api/videos/{uuid.uuid4()}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_id_is_400(self, client, users):
        response = await client.get("/api/videos/not-an-id")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_publish_requires_token(self, client, users):
        response = await client.post("/api/videos", data={"title": "t", "description": "d"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_publish_without_files_is_400(self, client, users):
        response = await client.post(
            "/api/videos",
            data={"title": "t", "description": "d"},
            headers=auth_headers(users["u1"]["id"])
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_foreign_delete_is_403(self, client, video, users):
        response = await client.delete(f"/api/videos/{video['id']}", headers=auth_headers(users["u2"]["id"]))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_toggle_publish(self, client, video, users):
        response = await client.patch(
            f"/api/videos/{video['id']}/toggle-publish",
            headers=auth_headers(users["u1"]["id"])
        )

        assert response.status_code == 200
        assert response.json()["isPublished"] is False

    @pytest.mark.asyncio
    async def test_invalid_token_is_401(self, client, video):
        response = await client.get("/api/videos", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401


class TestCommentAndLikeRoutes:

    @pytest.mark.asyncio
    async def test_comment_like_flow(self, client, video, users):
        u1, u2 = users["u1"]["id"], users["u2"]["id"]

        created = await client.post(
            f"/api/comments/{video['id']}", json={"content": "first!"}, headers=auth_headers(u2)
        )
        assert created.status_code == 201
        comment_id = created.json()["id"]

        liked = await client.post(f"/api/likes/toggle/comment/{comment_id}", headers=auth_headers(u2))
        assert liked.json() == {"state": True, "likeCount": 1}

        as_u2 = (await client.get(f"/api/comments/{video['id']}", headers=auth_headers(u2))).json()
        as_u1 = (await client.get(f"/api/comments/{video['id']}", headers=auth_headers(u1))).json()

        assert as_u2["comments"][0]["viewerHasLiked"] is True
        assert as_u1["comments"][0]["viewerHasLiked"] is False
        assert as_u1["comments"][0]["likeCount"] == 1

    @pytest.mark.asyncio
    async def test_empty_comment_is_400(self, client, video, users):
        response = await client.post(
            f"/api/comments/{video['id']}", json={"content": ""}, headers=auth_headers(users["u2"]["id"])
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_bad_like_kind_is_400(self, client, video, users):
        response = await client.post(
            f"/api/likes/toggle/channel/{video['id']}", headers=auth_headers(users["u2"]["id"])
        )

        assert response.status_code == 400


class TestTweetPlaylistSubscriptionUserRoutes:

    @pytest.mark.asyncio
    async def test_tweet_foreign_delete(self, client, users):
        created = await client.post("/api/tweets", json={"content": "hello"}, headers=auth_headers(users["u2"]["id"]))
        tweet_id = created.json()["id"]

        denied = await client.delete(f"/api/tweets/{tweet_id}", headers=auth_headers(users["u1"]["id"]))
        listing = await client.get(f"/api/tweets/user/{users['u2']['id']}")

        assert denied.status_code == 403
        assert [t["id"] for t in listing.json()["tweets"]] == [tweet_id]

    @pytest.mark.asyncio
    async def test_playlist_flow(self, client, video, users):
        headers = auth_headers(users["u1"]["id"])

        created = await client.post("/api/playlists", json={"name": "Mix"}, headers=headers)
        playlist_id = created.json()["id"]
        added = await client.patch(f"/api/playlists/{playlist_id}/add/{video['id']}", headers=headers)
        listing = await client.get(f"/api/playlists/user/{users['u1']['id']}")

        assert created.status_code == 201
        assert added.json()["videos"][0]["thumbnailUrl"] == video["thumbnail_url"]
        assert listing.json()["playlists"][0]["videoCount"] == 1

    @pytest.mark.asyncio
    async def test_subscription_toggle_and_channel_profile(self, client, users):
        toggled = await client.post(
            f"/api/subscriptions/c/{users['u1']['id']}", headers=auth_headers(users["u2"]["id"])
        )
        profile = await client.get("/api/users/c/u1", headers=auth_headers(users["u2"]["id"]))
        subscribers = await client.get(f"/api/subscriptions/c/{users['u1']['id']}")

        assert toggled.json() == {"state": True, "subscribersCount": 1}
        assert profile.json()["viewerIsSubscribed"] is True
        assert subscribers.json()["subscribers"][0]["username"] == "u2"

    @pytest.mark.asyncio
    async def test_self_subscription_is_400(self, client, users):
        response = await client.post(
            f"/api/subscriptions/c/{users['u1']['id']}", headers=auth_headers(users["u1"]["id"])
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_user_conflict(self, client, users):
        created = await client.post("/api/users", json={"username": "Carol", "fullName": "Carol C"})
        duplicate = await client.post("/api/users", json={"username": "carol", "fullName": "Other"})

        assert created.status_code == 201
        assert created.json()["username"] == "carol"
        assert duplicate.status_code == 409
