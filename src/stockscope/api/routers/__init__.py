"""API routers package."""

from stockscope.api.routers.portfolio import router as portfolio_router
from stockscope.api.routers.alerts import router as alerts_router
from stockscope.api.routers.watchlist import router as watchlist_router
from stockscope.api.routers.market import router as market_router
from stockscope.api.routers.data import router as data_router

__all__ = [
    "portfolio_router",
    "alerts_router",
    "watchlist_router",
    "market_router",
    "data_router",
]
