"""Feed service: trade-derived posts and like toggles."""

import uuid
from datetime import datetime
from typing import Callable, Optional

from papertrade.core.timezone import now_eastern
from papertrade.core.exceptions import NotFoundError, UserNotFoundError
from papertrade.domain.models import Like, Post, Trade
from papertrade.domain.views import FeedItem, LikeResult
from papertrade.repositories.protocols import UnitOfWork

DEFAULT_FEED_LIMIT = 50


class FeedService:
    """
    Stores posts emitted by trades and the likes on them.

    Posts are only written by the trade path (publish_trade_post), inside
    the trade's own unit of work.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        clock: Callable[[], datetime] = now_eastern,
    ):
        self._uow_factory = uow_factory
        self._clock = clock

    def publish_trade_post(self, uow: UnitOfWork, trade: Trade, rationale: str) -> Post:
        """Stage the post for a trade in the caller's unit of work."""
        post = Post(
            post_id=str(uuid.uuid4()),
            user_id=trade.user_id,
            trade_id=trade.trade_id,
            symbol=trade.symbol,
            quantity=trade.quantity,
            side=trade.side,
            rationale=rationale or "",
            created_at=trade.executed_at,
        )
        return uow.posts.add(post)

    def toggle_like(self, user_id: str, post_id: str) -> LikeResult:
        """
        Like the post if the user does not like it yet, otherwise unlike it.

        The check, the write and the recount happen in one unit. If a
        concurrent toggle inserted the same like first, the unique
        constraint fails the insert and StorageConflictError is raised;
        callers may treat that as a no-op and retry.
        """
        with self._uow_factory() as uow:
            if uow.users.get(user_id) is None:
                raise UserNotFoundError(user_id)
            if uow.posts.get(post_id) is None:
                raise NotFoundError("Post", post_id)

            if uow.posts.has_like(user_id, post_id):
                uow.posts.remove_like(user_id, post_id)
                liked = False
            else:
                uow.posts.add_like(Like(user_id=user_id, post_id=post_id, liked_at=self._clock()))
                liked = True

            like_count = uow.posts.count_likes(post_id)
            uow.commit()

        return LikeResult(post_id=post_id, like_count=like_count, liked=liked)

    def get_post(self, post_id: str) -> Post:
        """Retrieve a single post."""
        with self._uow_factory() as uow:
            post = uow.posts.get(post_id)
        if post is None:
            raise NotFoundError("Post", post_id)
        return post

    def list_feed(
        self,
        viewer_id: Optional[str] = None,
        limit: int = DEFAULT_FEED_LIMIT,
        since: Optional[datetime] = None,
    ) -> list[FeedItem]:
        """Newest posts with like counts and whether the viewer likes each."""
        with self._uow_factory() as uow:
            posts = uow.posts.list_recent(limit=limit, since=since)
            post_ids = [p.post_id for p in posts]
            counts = uow.posts.count_likes_for(post_ids)
            liked = uow.posts.liked_post_ids(viewer_id, post_ids) if viewer_id else set()
            authors = uow.users.get_many({p.user_id for p in posts})

        return [
            FeedItem(
                post_id=p.post_id,
                user_id=p.user_id,
                username=authors[p.user_id].username if p.user_id in authors else "",
                symbol=p.symbol,
                quantity=p.quantity,
                side=p.side,
                rationale=p.rationale,
                created_at=p.created_at,
                like_count=counts.get(p.post_id, 0),
                liked_by_viewer=p.post_id in liked,
            )
            for p in posts
        ]
