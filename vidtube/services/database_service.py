"""
Database Service - Entity Store

Handles all persistence using SQLAlchemy async. PostgreSQL (asyncpg) in
deployment, SQLite (aiosqlite) for local runs and tests.
"""
import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional, Dict, Any

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.exc import IntegrityError
from sqlalchemy import (
    Column, String, Integer, Float, Boolean, DateTime, Text, ForeignKey, Uuid,
    UniqueConstraint, select, update, delete, func
)

from vidtube.errors import ConflictError
from vidtube.models.like import LikeTarget
from vidtube.settings import get_settings

logger = logging.getLogger(__name__)

# Column widths, shared with input validation
USERNAME_MAX_LENGTH = 50
FULL_NAME_MAX_LENGTH = 100
TITLE_MAX_LENGTH = 200
PLAYLIST_NAME_MAX_LENGTH = 200


# SQLAlchemy Base
class Base(DeclarativeBase):
    pass


# =============================================================================
# Database Models (SQLAlchemy ORM)
# =============================================================================

class UserModel(Base):
    """Users table - public channel profile only, credentials live with the identity provider"""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(USERNAME_MAX_LENGTH), unique=True, nullable=False, index=True)
    full_name = Column(String(FULL_NAME_MAX_LENGTH), nullable=False, default="")
    avatar = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class VideoModel(Base):
    """Videos table - media itself lives in the blob store, only URIs are kept"""
    __tablename__ = "videos"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=False, default="")
    video_url = Column(Text, nullable=False)
    thumbnail_url = Column(Text, nullable=False)
    duration = Column(Float, nullable=False, default=0.0)
    views = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class CommentModel(Base):
    """Comments table"""
    __tablename__ = "comments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    video_id = Column(Uuid, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class TweetModel(Base):
    """Tweets table"""
    __tablename__ = "tweets"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class PlaylistModel(Base):
    """Playlists table"""
    __tablename__ = "playlists"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(PLAYLIST_NAME_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class PlaylistVideoModel(Base):
    """Ordered playlist entries - a video appears at most once per playlist"""
    __tablename__ = "playlist_videos"
    __table_args__ = (
        UniqueConstraint("playlist_id", "video_id", name="uq_playlist_videos_playlist_video"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    playlist_id = Column(Uuid, ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False, index=True)
    video_id = Column(Uuid, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    added_at = Column(DateTime, default=datetime.utcnow)


class LikeModel(Base):
    """Like edges - presence, not count, is the relationship"""
    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("liker_id", "target_kind", "target_id", name="uq_likes_liker_target"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    liker_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    target_kind = Column(String(20), nullable=False)
    target_id = Column(Uuid, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class SubscriptionModel(Base):
    """Subscription edges between a subscriber and a channel (both users)"""
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_subscriber_channel"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    subscriber_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    channel_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)


LIKE_TARGET_MODELS = {
    LikeTarget.VIDEO: VideoModel,
    LikeTarget.COMMENT: CommentModel,
    LikeTarget.TWEET: TweetModel,
}


# =============================================================================
# Row serializers
# =============================================================================

def profile_to_dict(user: UserModel) -> Dict[str, Any]:
    """Public owner projection - never carries internal fields"""
    return {
        "id": str(user.id),
        "username": user.username,
        "full_name": user.full_name,
        "avatar": user.avatar
    }


def user_to_dict(user: UserModel) -> Dict[str, Any]:
    """Convert user model to dictionary"""
    result = profile_to_dict(user)
    result["bio"] = user.bio
    result["created_at"] = user.created_at
    return result


def video_to_dict(video: VideoModel) -> Dict[str, Any]:
    """Convert video model to dictionary"""
    return {
        "id": str(video.id),
        "owner_id": str(video.owner_id),
        "title": video.title,
        "description": video.description,
        "video_url": video.video_url,
        "thumbnail_url": video.thumbnail_url,
        "duration": video.duration,
        "views": video.views,
        "is_published": video.is_published,
        "created_at": video.created_at,
        "updated_at": video.updated_at
    }


def comment_to_dict(comment: CommentModel) -> Dict[str, Any]:
    """Convert comment model to dictionary"""
    return {
        "id": str(comment.id),
        "video_id": str(comment.video_id),
        "owner_id": str(comment.owner_id),
        "content": comment.content,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at
    }


def tweet_to_dict(tweet: TweetModel) -> Dict[str, Any]:
    """Convert tweet model to dictionary"""
    return {
        "id": str(tweet.id),
        "owner_id": str(tweet.owner_id),
        "content": tweet.content,
        "created_at": tweet.created_at,
        "updated_at": tweet.updated_at
    }


def playlist_to_dict(playlist: PlaylistModel) -> Dict[str, Any]:
    """Convert playlist model to dictionary"""
    return {
        "id": str(playlist.id),
        "owner_id": str(playlist.owner_id),
        "name": playlist.name,
        "description": playlist.description,
        "created_at": playlist.created_at,
        "updated_at": playlist.updated_at
    }


def as_uuid(value) -> uuid.UUID:
    """Coerce a validated identifier to a UUID"""
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


# =============================================================================
# Database Service
# =============================================================================

class DatabaseService:
    """Service for database operations"""

    def __init__(self, database_url: Optional[str] = None):
        """Initialize database service"""
        settings = get_settings()
        self.engine = None
        self.async_session = None
        self.initialized = False
        self.echo = settings.database_echo
        self.database_url = database_url or settings.async_database_url

    async def initialize(self):
        """Initialize database connection and create tables"""
        if self.initialized:
            return

        try:
            engine_options = {"echo": self.echo, "pool_pre_ping": True}
            if not self.database_url.startswith("sqlite"):
                engine_options.update(
                    pool_size=5,
                    max_overflow=10,
                    pool_recycle=300,    # Recycle connections every 5 minutes
                    pool_timeout=30,     # Timeout for getting connection from pool
                )
            self.engine = create_async_engine(self.database_url, **engine_options)

            # Create session factory
            self.async_session = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False
            )

            # Create tables
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

            self.initialized = True
            logger.info("Database service initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

    async def close(self):
        """Close database connection"""
        if self.engine:
            await self.engine.dispose()
            self.initialized = False
            logger.info("Database connection closed")

    @asynccontextmanager
    async def get_session(self):
        """Get database session context manager"""
        if not self.initialized:
            await self.initialize()

        async with self.async_session() as session:
            try:
                yield session
                await session.commit()
            except BaseException:
                # Cancellation included: a cancelled request leaves nothing behind
                await session.rollback()
                raise

    # =========================================================================
    # Generic row helpers
    # =========================================================================

    async def _fetch(self, model, row_id: str):
        async with self.get_session() as session:
            return await session.get(model, as_uuid(row_id))

    async def _update_row(self, model, row_id: str, values: Dict[str, Any]):
        async with self.get_session() as session:
            values["updated_at"] = datetime.utcnow()
            await session.execute(
                update(model).where(model.id == as_uuid(row_id)).values(**values)
            )
            return await session.get(model, as_uuid(row_id), populate_existing=True)

    # =========================================================================
    # User Operations
    # =========================================================================

    async def create_user(
        self,
        username: str,
        full_name: str,
        avatar: Optional[str] = None,
        bio: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create a new user; username uniqueness is enforced by the table"""
        try:
            async with self.get_session() as session:
                user = UserModel(
                    id=uuid.uuid4(),
                    username=username,
                    full_name=full_name,
                    avatar=avatar,
                    bio=bio,
                    created_at=datetime.utcnow()
                )
                session.add(user)
                await session.flush()
                return user_to_dict(user)
        except IntegrityError:
            raise ConflictError(f"Username '{username}' is already taken")

    async def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get user by ID"""
        user = await self._fetch(UserModel, user_id)
        return user_to_dict(user) if user else None

    async def get_user_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        """Get user by username"""
        async with self.get_session() as session:
            result = await session.execute(
                select(UserModel).where(UserModel.username == username)
            )
            user = result.scalar_one_or_none()

            if not user:
                return None

            return user_to_dict(user)

    async def get_channel_stats(
        self, channel_id: str, viewer_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Subscriber counts for a channel and whether the viewer is subscribed"""
        async with self.get_session() as session:
            channel = as_uuid(channel_id)
            subscribers_count = await session.scalar(
                select(func.count(SubscriptionModel.id)).where(SubscriptionModel.channel_id == channel)
            )
            subscribed_to_count = await session.scalar(
                select(func.count(SubscriptionModel.id)).where(SubscriptionModel.subscriber_id == channel)
            )
            viewer_is_subscribed = False
            if viewer_id:
                edge = await session.scalar(
                    select(SubscriptionModel.id).where(
                        SubscriptionModel.channel_id == channel,
                        SubscriptionModel.subscriber_id == as_uuid(viewer_id)
                    )
                )
                viewer_is_subscribed = edge is not None

            return {
                "subscribers_count": subscribers_count or 0,
                "subscribed_to_count": subscribed_to_count or 0,
                "viewer_is_subscribed": viewer_is_subscribed
            }

    async def _list_subscription_profiles(self, user_column, filter_column, user_id: str, offset: int, limit: int):
        async with self.get_session() as session:
            scope = filter_column == as_uuid(user_id)
            total = await session.scalar(
                select(func.count(SubscriptionModel.id))
                .select_from(SubscriptionModel)
                .join(UserModel, UserModel.id == user_column)
                .where(scope)
            )
            result = await session.execute(
                select(UserModel, SubscriptionModel.created_at)
                .join(SubscriptionModel, UserModel.id == user_column)
                .where(scope)
                .order_by(SubscriptionModel.created_at.desc(), SubscriptionModel.id.desc())
                .offset(offset)
                .limit(limit)
            )
            users = []
            for user, subscribed_at in result.all():
                profile = profile_to_dict(user)
                profile["subscribed_at"] = subscribed_at
                users.append(profile)

            return {"users": users, "total": total or 0}

    async def list_channel_subscribers(self, channel_id: str, offset: int = 0, limit: int = 10) -> Dict[str, Any]:
        """Users subscribed to a channel, newest subscription first"""
        return await self._list_subscription_profiles(
            SubscriptionModel.subscriber_id, SubscriptionModel.channel_id, channel_id, offset, limit
        )

    async def list_subscribed_channels(self, subscriber_id: str, offset: int = 0, limit: int = 10) -> Dict[str, Any]:
        """Channels a user is subscribed to, newest subscription first"""
        return await self._list_subscription_profiles(
            SubscriptionModel.channel_id, SubscriptionModel.subscriber_id, subscriber_id, offset, limit
        )

    # =========================================================================
    # Video Operations
    # =========================================================================

    async def create_video(
        self,
        owner_id: str,
        title: str,
        description: str,
        video_url: str,
        thumbnail_url: str,
        duration: float = 0.0,
        is_published: bool = True,
        created_at: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """Create a new video entry"""
        async with self.get_session() as session:
            now = created_at or datetime.utcnow()
            video = VideoModel(
                id=uuid.uuid4(),
                owner_id=as_uuid(owner_id),
                title=title,
                description=description,
                video_url=video_url,
                thumbnail_url=thumbnail_url,
                duration=duration or 0.0,
                views=0,
                is_published=is_published,
                created_at=now,
                updated_at=now
            )

            session.add(video)
            await session.flush()

            return video_to_dict(video)

    async def get_video(self, video_id: str) -> Optional[Dict[str, Any]]:
        """Get video by ID (ownership is checked by the caller)"""
        video = await self._fetch(VideoModel, video_id)
        return video_to_dict(video) if video else None

    async def update_video(self, video_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Update video fields"""
        video = await self._update_row(VideoModel, video_id, dict(updates))
        return video_to_dict(video) if video else None

    async def delete_video(self, video_id: str) -> bool:
        """
        Delete a video together with everything that hangs off it.

        Removes, in one transaction: likes on the video, likes on its
        comments, its comments, its playlist entries and the video row.
        """
        async with self.get_session() as session:
            vid = as_uuid(video_id)
            comment_ids = select(CommentModel.id).where(CommentModel.video_id == vid)

            await session.execute(
                delete(LikeModel)
                .where(
                    LikeModel.target_kind == LikeTarget.COMMENT.value,
                    LikeModel.target_id.in_(comment_ids)
                )
                .execution_options(synchronize_session=False)
            )
            await session.execute(
                delete(LikeModel).where(
                    LikeModel.target_kind == LikeTarget.VIDEO.value,
                    LikeModel.target_id == vid
                )
            )
            await session.execute(delete(CommentModel).where(CommentModel.video_id == vid))
            await session.execute(delete(PlaylistVideoModel).where(PlaylistVideoModel.video_id == vid))
            result = await session.execute(delete(VideoModel).where(VideoModel.id == vid))
            return result.rowcount > 0

    # =========================================================================
    # Comment Operations
    # =========================================================================

    async def create_comment(
        self,
        video_id: str,
        owner_id: str,
        content: str,
        created_at: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """Create a new comment"""
        async with self.get_session() as session:
            now = created_at or datetime.utcnow()
            comment = CommentModel(
                id=uuid.uuid4(),
                video_id=as_uuid(video_id),
                owner_id=as_uuid(owner_id),
                content=content,
                created_at=now,
                updated_at=now
            )
            session.add(comment)
            await session.flush()
            return comment_to_dict(comment)

    async def get_comment(self, comment_id: str) -> Optional[Dict[str, Any]]:
        """Get comment by ID"""
        comment = await self._fetch(CommentModel, comment_id)
        return comment_to_dict(comment) if comment else None

    async def update_comment(self, comment_id: str, content: str) -> Optional[Dict[str, Any]]:
        """Replace comment content"""
        comment = await self._update_row(CommentModel, comment_id, {"content": content})
        return comment_to_dict(comment) if comment else None

    async def delete_comment(self, comment_id: str) -> bool:
        """Delete a comment and its likes"""
        return await self._delete_likeable(CommentModel, LikeTarget.COMMENT, comment_id)

    # =========================================================================
    # Tweet Operations
    # =========================================================================

    async def create_tweet(
        self,
        owner_id: str,
        content: str,
        created_at: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """Create a new tweet"""
        async with self.get_session() as session:
            now = created_at or datetime.utcnow()
            tweet = TweetModel(
                id=uuid.uuid4(),
                owner_id=as_uuid(owner_id),
                content=content,
                created_at=now,
                updated_at=now
            )
            session.add(tweet)
            await session.flush()
            return tweet_to_dict(tweet)

    async def get_tweet(self, tweet_id: str) -> Optional[Dict[str, Any]]:
        """Get tweet by ID"""
        tweet = await self._fetch(TweetModel, tweet_id)
        return tweet_to_dict(tweet) if tweet else None

    async def update_tweet(self, tweet_id: str, content: str) -> Optional[Dict[str, Any]]:
        """Replace tweet content"""
        tweet = await self._update_row(TweetModel, tweet_id, {"content": content})
        return tweet_to_dict(tweet) if tweet else None

    async def delete_tweet(self, tweet_id: str) -> bool:
        """Delete a tweet and its likes"""
        return await self._delete_likeable(TweetModel, LikeTarget.TWEET, tweet_id)

    async def _delete_likeable(self, model, kind: LikeTarget, row_id: str) -> bool:
        async with self.get_session() as session:
            target = as_uuid(row_id)
            await session.execute(
                delete(LikeModel).where(
                    LikeModel.target_kind == kind.value,
                    LikeModel.target_id == target
                )
            )
            result = await session.execute(delete(model).where(model.id == target))
            return result.rowcount > 0

    # =========================================================================
    # Playlist Operations
    # =========================================================================

    async def create_playlist(
        self,
        owner_id: str,
        name: str,
        description: str = ""
    ) -> Dict[str, Any]:
        """Create a new, empty playlist"""
        async with self.get_session() as session:
            now = datetime.utcnow()
            playlist = PlaylistModel(
                id=uuid.uuid4(),
                owner_id=as_uuid(owner_id),
                name=name,
                description=description,
                created_at=now,
                updated_at=now
            )
            session.add(playlist)
            await session.flush()

            result = playlist_to_dict(playlist)
            result["videos"] = []
            return result

    async def get_playlist(self, playlist_id: str) -> Optional[Dict[str, Any]]:
        """Get playlist by ID with its videos in playlist order"""
        async with self.get_session() as session:
            playlist = await session.get(PlaylistModel, as_uuid(playlist_id))
            if not playlist:
                return None

            rows = await session.execute(
                select(VideoModel)
                .join(PlaylistVideoModel, PlaylistVideoModel.video_id == VideoModel.id)
                .where(PlaylistVideoModel.playlist_id == playlist.id)
                .order_by(PlaylistVideoModel.position, PlaylistVideoModel.added_at)
            )

            result = playlist_to_dict(playlist)
            result["videos"] = [
                {
                    "id": str(video.id),
                    "title": video.title,
                    "duration": video.duration,
                    "thumbnail_url": video.thumbnail_url
                }
                for video in rows.scalars().all()
            ]
            return result

    async def list_playlists(self, owner_id: str, offset: int = 0, limit: int = 10) -> Dict[str, Any]:
        """List a user's playlists with their video counts"""
        async with self.get_session() as session:
            owner = as_uuid(owner_id)
            total = await session.scalar(
                select(func.count(PlaylistModel.id)).where(PlaylistModel.owner_id == owner)
            )

            video_count = (
                select(func.count(PlaylistVideoModel.id))
                .where(PlaylistVideoModel.playlist_id == PlaylistModel.id)
                .correlate(PlaylistModel)
                .scalar_subquery()
            )
            result = await session.execute(
                select(PlaylistModel, video_count.label("video_count"))
                .where(PlaylistModel.owner_id == owner)
                .order_by(PlaylistModel.created_at.desc(), PlaylistModel.id.desc())
                .offset(offset)
                .limit(limit)
            )

            playlists = []
            for playlist, count in result.all():
                item = playlist_to_dict(playlist)
                item["video_count"] = count or 0
                playlists.append(item)

            return {"playlists": playlists, "total": total or 0}

    async def update_playlist(self, playlist_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Update playlist name/description"""
        await self._update_row(PlaylistModel, playlist_id, dict(updates))
        return await self.get_playlist(playlist_id)

    async def delete_playlist(self, playlist_id: str) -> bool:
        """Delete a playlist and its entries (the videos themselves stay)"""
        async with self.get_session() as session:
            pid = as_uuid(playlist_id)
            await session.execute(delete(PlaylistVideoModel).where(PlaylistVideoModel.playlist_id == pid))
            result = await session.execute(delete(PlaylistModel).where(PlaylistModel.id == pid))
            return result.rowcount > 0

    async def add_playlist_video(self, playlist_id: str, video_id: str) -> None:
        """Append a video; raises ConflictError if it is already in the playlist"""
        try:
            async with self.get_session() as session:
                pid = as_uuid(playlist_id)
                next_position = await session.scalar(
                    select(func.coalesce(func.max(PlaylistVideoModel.position), -1) + 1)
                    .where(PlaylistVideoModel.playlist_id == pid)
                )
                session.add(PlaylistVideoModel(
                    id=uuid.uuid4(),
                    playlist_id=pid,
                    video_id=as_uuid(video_id),
                    position=next_position,
                    added_at=datetime.utcnow()
                ))
                await session.flush()
                await session.execute(
                    update(PlaylistModel).where(PlaylistModel.id == pid).values(updated_at=datetime.utcnow())
                )
        except IntegrityError:
            raise ConflictError("Video is already in the playlist")

    async def remove_playlist_video(self, playlist_id: str, video_id: str) -> bool:
        """Remove a video from a playlist"""
        async with self.get_session() as session:
            pid = as_uuid(playlist_id)
            result = await session.execute(
                delete(PlaylistVideoModel).where(
                    PlaylistVideoModel.playlist_id == pid,
                    PlaylistVideoModel.video_id == as_uuid(video_id)
                )
            )
            if result.rowcount:
                await session.execute(
                    update(PlaylistModel).where(PlaylistModel.id == pid).values(updated_at=datetime.utcnow())
                )
            return result.rowcount > 0

    # =========================================================================
    # Toggle Edges (likes, subscriptions)
    #
    # Each side is a single conditional write. Inserts rely on the unique
    # constraint instead of a prior existence check.
    # =========================================================================

    async def target_exists(self, kind: LikeTarget, target_id: str) -> bool:
        """Check that a likeable entity exists"""
        model = LIKE_TARGET_MODELS[LikeTarget(kind)]
        async with self.get_session() as session:
            found = await session.scalar(select(model.id).where(model.id == as_uuid(target_id)))
            return found is not None

    async def insert_like(self, liker_id: str, kind: LikeTarget, target_id: str) -> None:
        """Insert a like edge; raises ConflictError if the edge already exists"""
        try:
            async with self.get_session() as session:
                session.add(LikeModel(
                    id=uuid.uuid4(),
                    liker_id=as_uuid(liker_id),
                    target_kind=LikeTarget(kind).value,
                    target_id=as_uuid(target_id),
                    created_at=datetime.utcnow()
                ))
        except IntegrityError:
            raise ConflictError("Like already exists")

    async def delete_like(self, liker_id: str, kind: LikeTarget, target_id: str) -> bool:
        """Delete a like edge if present; returns whether one was removed"""
        async with self.get_session() as session:
            result = await session.execute(
                delete(LikeModel).where(
                    LikeModel.liker_id == as_uuid(liker_id),
                    LikeModel.target_kind == LikeTarget(kind).value,
                    LikeModel.target_id == as_uuid(target_id)
                )
            )
            return result.rowcount > 0

    async def count_likes(self, kind: LikeTarget, target_id: str) -> int:
        """Number of like edges on a target"""
        async with self.get_session() as session:
            count = await session.scalar(
                select(func.count(LikeModel.id)).where(
                    LikeModel.target_kind == LikeTarget(kind).value,
                    LikeModel.target_id == as_uuid(target_id)
                )
            )
            return count or 0

    async def insert_subscription(self, subscriber_id: str, channel_id: str) -> None:
        """Insert a subscription edge; raises ConflictError if it already exists"""
        try:
            async with self.get_session() as session:
                session.add(SubscriptionModel(
                    id=uuid.uuid4(),
                    subscriber_id=as_uuid(subscriber_id),
                    channel_id=as_uuid(channel_id),
                    created_at=datetime.utcnow()
                ))
        except IntegrityError:
            raise ConflictError("Subscription already exists")

    async def delete_subscription(self, subscriber_id: str, channel_id: str) -> bool:
        """Delete a subscription edge if present; returns whether one was removed"""
        async with self.get_session() as session:
            result = await session.execute(
                delete(SubscriptionModel).where(
                    SubscriptionModel.subscriber_id == as_uuid(subscriber_id),
                    SubscriptionModel.channel_id == as_uuid(channel_id)
                )
            )
            return result.rowcount > 0


# =============================================================================
# Singleton Instance
# =============================================================================

_database_service: Optional[DatabaseService] = None


async def get_database_service() -> DatabaseService:
    """Get or create database service singleton"""
    global _database_service
    if _database_service is None:
        _database_service = DatabaseService()
        await _database_service.initialize()
    return _database_service
