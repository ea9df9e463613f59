"""Pydantic schemas for API request/response."""

from stockscope.api.schemas.portfolio import (
    HoldingCreateRequest,
    HoldingAtMarketRequest,
    HoldingUpdateRequest,
    HoldingResponse,
    HoldingMutationResponse,
    HoldingValuationResponse,
    PortfolioResponse,
)
from stockscope.api.schemas.alerts import (
    AlertCreateRequest,
    AlertResponse,
    AlertMutationResponse,
    AlertListResponse,
    ClearTriggeredResponse,
    TickReportResponse,
)
from stockscope.api.schemas.watchlist import (
    WatchlistCreateRequest,
    WatchlistItemResponse,
    WatchlistMutationResponse,
)
from stockscope.api.schemas.market import QuoteResponse, ComparisonResponse
from stockscope.api.schemas.data import (
    ImportSummaryResponse,
    CompactResponse,
    StorageUsageResponse,
)

__all__ = [
    "HoldingCreateRequest",
    "HoldingAtMarketRequest",
    "HoldingUpdateRequest",
    "HoldingResponse",
    "HoldingMutationResponse",
    "HoldingValuationResponse",
    "PortfolioResponse",
    "AlertCreateRequest",
    "AlertResponse",
    "AlertMutationResponse",
    "AlertListResponse",
    "ClearTriggeredResponse",
    "TickReportResponse",
    "WatchlistCreateRequest",
    "WatchlistItemResponse",
    "WatchlistMutationResponse",
    "QuoteResponse",
    "ComparisonResponse",
    "ImportSummaryResponse",
    "CompactResponse",
    "StorageUsageResponse",
]
