"""View models for service outputs."""

from stockscope.domain.views.market import Quote, ComparisonView
from stockscope.domain.views.portfolio import (
    HoldingValuation,
    PortfolioView,
    AlertView,
    WatchlistAddition,
)
from stockscope.domain.views.persistence import (
    SaveResult,
    CompactResult,
    StorageUsage,
    ImportSummary,
    MutationResult,
)
from stockscope.domain.views.scheduler import TickReport

__all__ = [
    "Quote",
    "ComparisonView",
    "HoldingValuation",
    "PortfolioView",
    "AlertView",
    "WatchlistAddition",
    "SaveResult",
    "CompactResult",
    "StorageUsage",
    "ImportSummary",
    "MutationResult",
    "TickReport",
]
