"""Post and like repository protocol."""

from datetime import datetime
from typing import Protocol, Optional

from papertrade.domain.models import Post, Like


class PostRepository(Protocol):
    """Interface for feed posts and their likes."""

    def add(self, post: Post) -> Post:
        """Stage a new post."""
        ...

    def get(self, post_id: str) -> Optional[Post]:
        """Retrieve a post by ID."""
        ...

    def list_recent(self, limit: int = 50, since: Optional[datetime] = None) -> list[Post]:
        """List posts newest first."""
        ...

    def has_like(self, user_id: str, post_id: str) -> bool:
        """Return True if the user currently likes the post."""
        ...

    def add_like(self, like: Like) -> None:
        """Insert a like; a duplicate pair violates the unique constraint."""
        ...

    def remove_like(self, user_id: str, post_id: str) -> None:
        """Delete a like."""
        ...

    def count_likes(self, post_id: str) -> int:
        """Number of likes on a post."""
        ...

    def count_likes_for(self, post_ids: list[str]) -> dict[str, int]:
        """Like counts for several posts (posts without likes are omitted)."""
        ...

    def liked_post_ids(self, user_id: str, post_ids: list[str]) -> set[str]:
        """Subset of post_ids the user likes."""
        ...
