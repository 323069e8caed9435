"""API routers package."""

from papertrade.api.routers.users import router as users_router
from papertrade.api.routers.trades import router as trades_router
from papertrade.api.routers.portfolio import router as portfolio_router
from papertrade.api.routers.feed import router as feed_router
from papertrade.api.routers.auth import router as auth_router

__all__ = [
    "users_router",
    "trades_router",
    "portfolio_router",
    "feed_router",
    "auth_router",
]
