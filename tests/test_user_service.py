"""
Tests for User Service
"""
import pytest
import pytest_asyncio

from vidtube.services.user_service import UserService


class TestUserService:
    """Test cases for UserService"""

    @pytest_asyncio.fixture
    async def user_service(self, db):
        service = UserService()
        service.set_database(db)
        return service

    @pytest.mark.asyncio
    async def test_create_user_lowercases_username(self, user_service):
        result = await user_service.create_user("  Alice ", "Alice A")

        assert result["success"] is True
        assert result["user"]["username"] == "alice"

    @pytest.mark.asyncio
    async def test_duplicate_username_is_a_conflict(self, user_service):
        await user_service.create_user("alice", "Alice A")
        result = await user_service.create_user("ALICE", "Another Alice")

        assert result["success"] is False
        assert result["error_type"] == "conflict"

    @pytest.mark.asyncio
    async def test_create_user_requires_username(self, user_service):
        result = await user_service.create_user("", "Nobody")

        assert result["error_type"] == "validation"

    @pytest.mark.asyncio
    async def test_create_user_bounds_field_lengths(self, user_service):
        long_username = await user_service.create_user("a" * 51, "Alice A")
        long_name = await user_service.create_user("alice", "A" * 101)

        assert long_username["error_type"] == "validation"
        assert long_name["error_type"] == "validation"

    @pytest.mark.asyncio
    async def test_channel_profile(self, user_service, db, users):
        await db.insert_subscription(users["u2"]["id"], users["u1"]["id"])

        as_u2 = await user_service.get_channel_profile("U1", users["u2"]["id"])
        anonymous = await user_service.get_channel_profile("u1")

        assert as_u2["channel"]["subscribers_count"] == 1
        assert as_u2["channel"]["subscribed_to_count"] == 0
        assert as_u2["channel"]["viewer_is_subscribed"] is True
        assert anonymous["channel"]["viewer_is_subscribed"] is False

    @pytest.mark.asyncio
    async def test_unknown_channel(self, user_service, users):
        result = await user_service.get_channel_profile("ghost")

        assert result["error_type"] == "not_found"
