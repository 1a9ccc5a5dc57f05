"""
Shared fixtures

Each test gets its own SQLite database file so that tests never see each
other's rows.
"""
import os
from datetime import datetime, timedelta

import pytest
import pytest_asyncio

# Set test environment before any settings are loaded
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["RATE_LIMIT_PER_MINUTE"] = "100000"

from vidtube.services.database_service import DatabaseService  # noqa: E402


@pytest_asyncio.fixture
async def db(tmp_path):
    """Initialized database service on a throwaway SQLite file"""
    service = DatabaseService(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await service.initialize()
    yield service
    await service.close()


@pytest_asyncio.fixture
async def users(db):
    """Two channel owners, u1 and u2"""
    u1 = await db.create_user("u1", "User One")
    u2 = await db.create_user("u2", "User Two")
    return {"u1": u1, "u2": u2}


@pytest.fixture
def base_time():
    return datetime(2024, 1, 1, 12, 0, 0)


@pytest_asyncio.fixture
async def video(db, users, base_time):
    """A published video V1 owned by u1"""
    return await db.create_video(
        owner_id=users["u1"]["id"],
        title="V1",
        description="First video",
        video_url="https://media.test/v1.mp4",
        thumbnail_url="https://media.test/v1.png",
        duration=42.0,
        created_at=base_time
    )


async def create_videos(db, owner_id, count, base_time, **kwargs):
    """Create ``count`` videos one minute apart; returns them oldest first"""
    videos = []
    for i in range(count):
        videos.append(await db.create_video(
            owner_id=owner_id,
            title=f"Video {i + 1}",
            description=f"Description {i + 1}",
            video_url=f"https://media.test/{i + 1}.mp4",
            thumbnail_url=f"https://media.test/{i + 1}.png",
            created_at=base_time + timedelta(minutes=i),
            **kwargs
        ))
    return videos
