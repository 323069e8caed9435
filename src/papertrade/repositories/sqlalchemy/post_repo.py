"""SQLAlchemy implementation of PostRepository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from papertrade.core.timezone import to_eastern, to_naive_eastern
from papertrade.domain.models import Post, Like
from papertrade.repositories.sqlalchemy.orm_models import PostORM, LikeORM


class SqlAlchemyPostRepository:
    """SQLAlchemy-backed repository for feed posts and likes."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, post: Post) -> Post:
        """Stage a new post."""
        orm_post = PostORM(
            post_id=post.post_id,
            user_id=post.user_id,
            trade_id=post.trade_id,
            symbol=post.symbol,
            quantity=post.quantity,
            side=post.side,
            rationale=post.rationale,
            created_at=to_naive_eastern(post.created_at),
        )
        self._db.add(orm_post)
        self._db.flush()
        return post

    def get(self, post_id: str) -> Optional[Post]:
        """Retrieve a post by ID."""
        orm_post = self._db.query(PostORM).filter(PostORM.post_id == post_id).first()
        return self._to_domain(orm_post) if orm_post else None

    def list_recent(self, limit: int = 50, since: Optional[datetime] = None) -> list[Post]:
        """List posts newest first."""
        query = self._db.query(PostORM)
        if since is not None:
            query = query.filter(PostORM.created_at >= to_naive_eastern(since))
        query = query.order_by(PostORM.created_at.desc(), PostORM.post_id).limit(limit)
        return [self._to_domain(p) for p in query.all()]

    # Likes

    def has_like(self, user_id: str, post_id: str) -> bool:
        """Return True if the user currently likes the post."""
        return (
            self._db.query(LikeORM)
            .filter(LikeORM.user_id == user_id, LikeORM.post_id == post_id)
            .first()
        ) is not None

    def add_like(self, like: Like) -> None:
        """Insert a like; a duplicate pair raises IntegrityError on flush."""
        self._db.add(
            LikeORM(
                user_id=like.user_id,
                post_id=like.post_id,
                liked_at=to_naive_eastern(like.liked_at),
            )
        )
        self._db.flush()

    def remove_like(self, user_id: str, post_id: str) -> None:
        """Delete a like."""
        self._db.query(LikeORM).filter(
            LikeORM.user_id == user_id,
            LikeORM.post_id == post_id,
        ).delete(synchronize_session="fetch")
        self._db.flush()

    def count_likes(self, post_id: str) -> int:
        """Number of likes on a post."""
        return (
            self._db.query(func.count(LikeORM.user_id))
            .filter(LikeORM.post_id == post_id)
            .scalar()
        ) or 0

    def count_likes_for(self, post_ids: list[str]) -> dict[str, int]:
        """Like counts for several posts (posts without likes are omitted)."""
        if not post_ids:
            return {}
        rows = (
            self._db.query(LikeORM.post_id, func.count(LikeORM.user_id))
            .filter(LikeORM.post_id.in_(post_ids))
            .group_by(LikeORM.post_id)
            .all()
        )
        return {post_id: count for post_id, count in rows}

    def liked_post_ids(self, user_id: str, post_ids: list[str]) -> set[str]:
        """Subset of post_ids the user likes."""
        if not post_ids:
            return set()
        rows = (
            self._db.query(LikeORM.post_id)
            .filter(LikeORM.user_id == user_id, LikeORM.post_id.in_(post_ids))
            .all()
        )
        return {row[0] for row in rows}

    @staticmethod
    def _to_domain(orm: PostORM) -> Post:
        """Convert ORM model to domain model."""
        return Post(
            post_id=orm.post_id,
            user_id=orm.user_id,
            trade_id=orm.trade_id,
            symbol=orm.symbol,
            quantity=int(orm.quantity),
            side=orm.side,
            rationale=orm.rationale or "",
            created_at=to_eastern(orm.created_at),
        )
