"""Service layer - business logic orchestration."""

from stockscope.services.domain_store import DomainStore
from stockscope.services.market_data_service import MarketDataService
from stockscope.services.persistence_service import PersistenceService
from stockscope.services.analysis_service import AnalysisService
from stockscope.services.alert_scheduler import AlertScheduler
from stockscope.services.tracker_service import StockTracker

__all__ = [
    "DomainStore",
    "MarketDataService",
    "PersistenceService",
    "AnalysisService",
    "AlertScheduler",
    "StockTracker",
]
