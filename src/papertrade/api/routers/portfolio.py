"""Portfolio valuation and leaderboard API."""

from fastapi import APIRouter, Depends

from papertrade.api.deps import get_current_user_id, get_portfolio_service
from papertrade.api.schemas import (
    LeaderboardEntryResponse,
    LeaderboardResponse,
    PortfolioResponse,
)
from papertrade.services import PortfolioService

router = APIRouter(tags=["portfolio"])


@router.get("/portfolio", response_model=PortfolioResponse)
def get_portfolio(
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """
    Return cash balance, positions and total value for the caller.

    Positions without a current price are valued at average cost and have
    priced=false.
    """
    return PortfolioResponse.model_validate(service.get_portfolio_value(user_id))


@router.get("/leaderboard", response_model=LeaderboardResponse)
def get_leaderboard(service: PortfolioService = Depends(get_portfolio_service)):
    """Return all users ranked by total value."""
    entries = service.get_leaderboard()
    return LeaderboardResponse(
        entries=[LeaderboardEntryResponse.model_validate(e) for e in entries],
        count=len(entries),
    )
