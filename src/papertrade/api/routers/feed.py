"""Social feed API: trade posts and likes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from papertrade.api.deps import get_current_user_id, get_feed_service, get_optional_user_id
from papertrade.api.schemas import FeedItemResponse, FeedResponse, LikeResponse
from papertrade.core.exceptions import ValidationError
from papertrade.core.timezone import parse_datetime_eastern
from papertrade.services import FeedService

router = APIRouter(tags=["feed"])


@router.get("/feed", response_model=FeedResponse)
def get_feed(
    limit: int = Query(50, ge=1, le=200),
    since: Optional[str] = Query(None, description="Only posts at or after this time (US/Eastern if no offset)"),
    viewer_id: Optional[str] = Depends(get_optional_user_id),
    service: FeedService = Depends(get_feed_service),
):
    """Newest trade posts with like counts."""
    since_dt = None
    if since:
        try:
            since_dt = parse_datetime_eastern(since)
        except (ValueError, OverflowError):
            raise ValidationError(f"Invalid 'since' timestamp: {since}") from None

    items = service.list_feed(viewer_id=viewer_id, limit=limit, since=since_dt)
    return FeedResponse(
        posts=[FeedItemResponse.model_validate(i) for i in items],
        count=len(items),
    )


@router.post("/posts/{post_id}/like", response_model=LikeResponse)
def toggle_like(
    post_id: str,
    user_id: str = Depends(get_current_user_id),
    service: FeedService = Depends(get_feed_service),
):
    """Like the post, or remove the caller's like if already present."""
    return LikeResponse.model_validate(service.toggle_like(user_id, post_id))
