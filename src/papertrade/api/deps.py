"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends, Header

from papertrade.app_context import AppContext, get_app_context
from papertrade.core.exceptions import UnauthenticatedError
from papertrade.services import (
    FeedService,
    LedgerService,
    PortfolioService,
    TradeExecutor,
    UserService,
)


def get_context() -> AppContext:
    """Provide the process-wide AppContext (overridden in tests)."""
    return get_app_context()


def get_user_service(ctx: AppContext = Depends(get_context)) -> UserService:
    """Provide UserService instance."""
    return ctx.users


def get_ledger_service(ctx: AppContext = Depends(get_context)) -> LedgerService:
    """Provide LedgerService instance."""
    return ctx.ledger


def get_trade_executor(ctx: AppContext = Depends(get_context)) -> TradeExecutor:
    """Provide TradeExecutor instance."""
    return ctx.trades


def get_feed_service(ctx: AppContext = Depends(get_context)) -> FeedService:
    """Provide FeedService instance."""
    return ctx.feed


def get_portfolio_service(ctx: AppContext = Depends(get_context)) -> PortfolioService:
    """Provide PortfolioService instance."""
    return ctx.portfolio


def get_bearer_token(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> str:
    """Extract the token from an 'Authorization: Bearer <token>' header."""
    if not authorization:
        raise UnauthenticatedError()
    scheme, _, token = authorization.partition(" ")
    if scheme.strip().lower() != "bearer" or not token.strip():
        raise UnauthenticatedError("Invalid authorization header")
    return token.strip()


def get_current_user_id(
    token: str = Depends(get_bearer_token),
    ctx: AppContext = Depends(get_context),
) -> str:
    """Resolve the caller's user id from the bearer token."""
    return ctx.auth.authenticate(token)


def get_optional_user_id(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    ctx: AppContext = Depends(get_context),
) -> Optional[str]:
    """Like get_current_user_id, but anonymous callers get None."""
    if not authorization:
        return None
    return ctx.auth.authenticate(get_bearer_token(authorization))
