"""
View Composer

Builds the denormalized, viewer-relative read models served by every
listing and detail endpoint. One implementation, parameterized by a
JoinSpec, covers videos, comments and tweets:

1. select base rows matching the scope filters
2. inner-join the owner's public profile (rows whose owner is gone are
   excluded and reported)
3. annotate like_count and viewer_has_liked from the like edges, as
   correlated subqueries so the edge list is never materialized
4. order by created_at DESC, id DESC and slice the page

Video detail additionally joins the owner's subscriber edges
(subscribers of the channel, not likes of the video).
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from sqlalchemy import select, func, literal

from vidtube.errors import DependencyError
from vidtube.models.like import LikeTarget
from vidtube.services import pagination
from vidtube.services.database_service import (
    DatabaseService, UserModel, VideoModel, CommentModel, TweetModel,
    LikeModel, SubscriptionModel, profile_to_dict, video_to_dict,
    comment_to_dict, tweet_to_dict, as_uuid
)
from vidtube.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinSpec:
    """How to compose one entity family"""
    kind: LikeTarget
    model: Any
    serialize: Callable[[Any], Dict[str, Any]]
    owner_subscribers_on_detail: bool = False


VIDEO_VIEW = JoinSpec(LikeTarget.VIDEO, VideoModel, video_to_dict, owner_subscribers_on_detail=True)
COMMENT_VIEW = JoinSpec(LikeTarget.COMMENT, CommentModel, comment_to_dict)
TWEET_VIEW = JoinSpec(LikeTarget.TWEET, TweetModel, tweet_to_dict)


class ViewComposer:
    """Join-and-annotate reads over the entity store"""

    def __init__(self, db: DatabaseService, timeout_seconds: Optional[float] = None):
        self.db = db
        self.timeout_seconds = timeout_seconds or get_settings().query_timeout_seconds

    # =========================================================================
    # Query construction
    # =========================================================================

    def _annotated_query(self, spec: JoinSpec, viewer_id: Optional[str], owner_subscribers: bool = False):
        model = spec.model

        like_count = (
            select(func.count(LikeModel.id))
            .where(LikeModel.target_kind == spec.kind.value, LikeModel.target_id == model.id)
            .correlate(model)
            .scalar_subquery()
        )
        if viewer_id:
            viewer_has_liked = (
                select(LikeModel.id)
                .where(
                    LikeModel.target_kind == spec.kind.value,
                    LikeModel.target_id == model.id,
                    LikeModel.liker_id == as_uuid(viewer_id)
                )
                .correlate(model)
                .exists()
            )
        else:
            viewer_has_liked = literal(False)

        columns = [
            model,
            UserModel,
            like_count.label("like_count"),
            viewer_has_liked.label("viewer_has_liked"),
        ]

        if owner_subscribers:
            subscribers_count = (
                select(func.count(SubscriptionModel.id))
                .where(SubscriptionModel.channel_id == UserModel.id)
                .correlate(UserModel)
                .scalar_subquery()
            )
            if viewer_id:
                viewer_is_subscribed = (
                    select(SubscriptionModel.id)
                    .where(
                        SubscriptionModel.channel_id == UserModel.id,
                        SubscriptionModel.subscriber_id == as_uuid(viewer_id)
                    )
                    .correlate(UserModel)
                    .exists()
                )
            else:
                viewer_is_subscribed = literal(False)
            columns += [
                subscribers_count.label("subscribers_count"),
                viewer_is_subscribed.label("viewer_is_subscribed"),
            ]

        return select(*columns).join(UserModel, UserModel.id == model.owner_id)

    def _row_to_view(self, spec: JoinSpec, row, owner_subscribers: bool = False) -> Dict[str, Any]:
        item = spec.serialize(row[0])
        owner = profile_to_dict(row[1])
        if owner_subscribers:
            owner["subscribers_count"] = int(row.subscribers_count or 0)
            owner["viewer_is_subscribed"] = bool(row.viewer_is_subscribed)

        item["owner"] = owner
        item["like_count"] = int(row.like_count or 0)
        item["viewer_has_liked"] = bool(row.viewer_has_liked)
        return item

    async def _bounded(self, coro, action: str):
        """All-or-nothing under the request's time budget"""
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            raise DependencyError(f"Timed out while {action}")

    # =========================================================================
    # Listing
    # =========================================================================

    async def list_items(
        self,
        spec: JoinSpec,
        filters: Sequence[Any],
        viewer_id: Optional[str],
        page: int,
        limit: int
    ) -> Dict[str, Any]:
        """
        Compose one page of items.

        Args:
            spec: Entity family to compose
            filters: SQLAlchemy criteria scoping the base rows
            viewer_id: Caller for viewer-relative flags (None when anonymous)
            page: Normalized page number
            limit: Normalized page size

        Returns:
            Dict with ``items`` (the page) and ``total`` (all matching rows)
        """
        return await self._bounded(
            self._list_items(spec, list(filters), viewer_id, page, limit),
            f"listing {spec.kind.value}s"
        )

    async def _list_items(self, spec, filters, viewer_id, page, limit):
        model = spec.model

        async with self.db.get_session() as session:
            orphaned = await session.scalar(
                select(func.count(model.id))
                .select_from(model)
                .outerjoin(UserModel, UserModel.id == model.owner_id)
                .where(UserModel.id.is_(None), *filters)
            )
            if orphaned:
                logger.warning(
                    f"Excluding {orphaned} {spec.kind.value} record(s) whose owner no longer exists"
                )

            count_query = (
                select(func.count(model.id))
                .select_from(model)
                .join(UserModel, UserModel.id == model.owner_id)
            )
            query = self._annotated_query(spec, viewer_id)
            if filters:
                count_query = count_query.where(*filters)
                query = query.where(*filters)

            total = await session.scalar(count_query)

            query = (
                query
                .order_by(model.created_at.desc(), model.id.desc())
                .offset(pagination.offset(page, limit))
                .limit(limit)
            )
            rows = (await session.execute(query)).all()

        return {
            "items": [self._row_to_view(spec, row) for row in rows],
            "total": total or 0
        }

    # =========================================================================
    # Single item
    # =========================================================================

    async def get_item(
        self,
        spec: JoinSpec,
        item_id: str,
        viewer_id: Optional[str],
        detail: bool = True
    ) -> Optional[Dict[str, Any]]:
        """
        Compose a single item, or None if it does not exist.

        With ``detail`` the owner-subscriber join is added for entity families that
        ask for it; without it only the owner and like stages run, which is
        what freshly created records are re-composed with.
        """
        owner_subscribers = detail and spec.owner_subscribers_on_detail
        return await self._bounded(
            self._get_item(spec, item_id, viewer_id, owner_subscribers),
            f"loading {spec.kind.value}"
        )

    async def compose_one(
        self,
        spec: JoinSpec,
        record: Dict[str, Any],
        viewer_id: Optional[str]
    ) -> Dict[str, Any]:
        """Re-compose a freshly written record with its owner and like stats"""
        composed = await self.get_item(spec, record["id"], viewer_id, detail=False)
        if composed is None:
            raise DependencyError(f"Could not load the new {spec.kind.value}")
        return composed

    async def _get_item(self, spec, item_id, viewer_id, owner_subscribers):
        model = spec.model

        async with self.db.get_session() as session:
            query = self._annotated_query(spec, viewer_id, owner_subscribers=owner_subscribers)
            row = (await session.execute(query.where(model.id == as_uuid(item_id)))).first()

            if row is None:
                if await session.get(model, as_uuid(item_id)) is not None:
                    logger.warning(
                        f"Excluding {spec.kind.value} {item_id}: owner no longer exists"
                    )
                return None

        return self._row_to_view(spec, row, owner_subscribers=owner_subscribers)
