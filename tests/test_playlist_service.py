"""
Tests for Playlist Service
"""
import uuid

import pytest
import pytest_asyncio

from vidtube.services.playlist_service import PlaylistService

from tests.conftest import create_videos


class TestPlaylistService:
    """Test cases for PlaylistService"""

    @pytest_asyncio.fixture
    async def playlist_service(self, db):
        service = PlaylistService()
        service.set_database(db)
        return service

    @pytest_asyncio.fixture
    async def playlist(self, playlist_service, users):
        result = await playlist_service.create_playlist(users["u1"]["id"], "Watch later", "queue")
        return result["playlist"]

    @pytest.mark.asyncio
    async def test_create_requires_name(self, playlist_service, users):
        result = await playlist_service.create_playlist(users["u1"]["id"], "  ")

        assert result["error_type"] == "validation"

    @pytest.mark.asyncio
    async def test_name_longer_than_column_is_rejected(self, playlist_service, playlist, users):
        created = await playlist_service.create_playlist(users["u1"]["id"], "n" * 201)
        renamed = await playlist_service.update_playlist(playlist["id"], users["u1"]["id"], name="n" * 201)

        assert created["error_type"] == "validation"
        assert renamed["error_type"] == "validation"

    @pytest.mark.asyncio
    async def test_add_videos_in_order(self, playlist_service, db, playlist, users, base_time):
        videos = await create_videos(db, users["u2"]["id"], 3, base_time)

        for v in (videos[2], videos[0], videos[1]):
            result = await playlist_service.add_video(playlist["id"], v["id"], users["u1"]["id"])
            assert result["success"] is True

        loaded = await playlist_service.get_playlist(playlist["id"])
        assert [v["id"] for v in loaded["playlist"]["videos"]] == [
            videos[2]["id"], videos[0]["id"], videos[1]["id"]
        ]
        assert set(loaded["playlist"]["videos"][0]) == {"id", "title", "duration", "thumbnail_url"}

    @pytest.mark.asyncio
    async def test_re_adding_is_a_no_op(self, playlist_service, playlist, video, users):
        await playlist_service.add_video(playlist["id"], video["id"], users["u1"]["id"])
        again = await playlist_service.add_video(playlist["id"], video["id"], users["u1"]["id"])

        assert again["success"] is True
        assert len(again["playlist"]["videos"]) == 1

    @pytest.mark.asyncio
    async def test_add_missing_video(self, playlist_service, playlist, users):
        result = await playlist_service.add_video(playlist["id"], str(uuid.uuid4()), users["u1"]["id"])

        assert result["error_type"] == "not_found"

    @pytest.mark.asyncio
    async def test_add_someone_elses_unpublished_video(self, playlist_service, db, playlist, users, base_time):
        hidden = (await create_videos(db, users["u2"]["id"], 1, base_time, is_published=False))[0]

        result = await playlist_service.add_video(playlist["id"], hidden["id"], users["u1"]["id"])

        assert result["error_type"] == "not_found"
        assert (await db.get_playlist(playlist["id"]))["videos"] == []

    @pytest.mark.asyncio
    async def test_add_by_other_user_is_refused(self, playlist_service, playlist, video, users):
        result = await playlist_service.add_video(playlist["id"], video["id"], users["u2"]["id"])

        assert result["error_type"] == "authorization"

    @pytest.mark.asyncio
    async def test_remove_video(self, playlist_service, playlist, video, users):
        await playlist_service.add_video(playlist["id"], video["id"], users["u1"]["id"])

        removed = await playlist_service.remove_video(playlist["id"], video["id"], users["u1"]["id"])
        again = await playlist_service.remove_video(playlist["id"], video["id"], users["u1"]["id"])

        assert removed["playlist"]["videos"] == []
        assert again["error_type"] == "not_found"

    @pytest.mark.asyncio
    async def test_list_user_playlists(self, playlist_service, playlist, video, users):
        await playlist_service.add_video(playlist["id"], video["id"], users["u1"]["id"])

        mine = await playlist_service.list_user_playlists(users["u1"]["id"])
        theirs = await playlist_service.list_user_playlists(users["u2"]["id"])

        assert mine["playlists"][0]["video_count"] == 1
        assert theirs["playlists"] == []
        assert theirs["success"] is True

    @pytest.mark.asyncio
    async def test_list_for_unknown_user(self, playlist_service, users):
        result = await playlist_service.list_user_playlists(str(uuid.uuid4()))

        assert result["error_type"] == "not_found"

    @pytest.mark.asyncio
    async def test_update_and_delete(self, playlist_service, playlist, users):
        nothing = await playlist_service.update_playlist(playlist["id"], users["u1"]["id"])
        renamed = await playlist_service.update_playlist(playlist["id"], users["u1"]["id"], name="Later")
        foreign_delete = await playlist_service.delete_playlist(playlist["id"], users["u2"]["id"])
        deleted = await playlist_service.delete_playlist(playlist["id"], users["u1"]["id"])
        gone = await playlist_service.get_playlist(playlist["id"])

        assert nothing["error_type"] == "validation"
        assert renamed["playlist"]["name"] == "Later"
        assert foreign_delete["error_type"] == "authorization"
        assert deleted["success"] is True
        assert gone["error_type"] == "not_found"
