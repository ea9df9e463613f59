"""Application context owning the store, services and scheduler.

Constructed by the process entry point and passed explicitly to the
scheduler, persistence layer and API adapter.
"""

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from stockscope.config.settings import Settings, get_settings
from stockscope.notifications import (
    CompositeNotificationSink,
    LoggingNotificationSink,
    NotificationSink,
    WebhookNotificationSink,
)
from stockscope.providers import PriceFeed, StubPriceFeed
from stockscope.repositories.protocols import KeyValueRepository
from stockscope.repositories.sqlalchemy import SqlAlchemyKeyValueRepository
from stockscope.repositories.sqlalchemy.database import open_session
from stockscope.services import (
    AlertScheduler,
    AnalysisService,
    DomainStore,
    MarketDataService,
    PersistenceService,
    StockTracker,
)

logger = logging.getLogger(__name__)


def build_notifier(settings: Settings) -> NotificationSink:
    """Logging sink, plus a webhook sink when a URL is configured."""
    sinks: list[NotificationSink] = [LoggingNotificationSink()]
    if settings.notification_webhook_url:
        sinks.append(WebhookNotificationSink(settings.notification_webhook_url))
    return CompositeNotificationSink(sinks)


class AppContext:
    """
    Application context providing access to all services.

    One instance per process. Owns the DomainStore (the only copy of the
    in-memory state), the database session and the alert scheduler handle,
    and releases them in close().
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        repository: Optional[KeyValueRepository] = None,
        price_feed: Optional[PriceFeed] = None,
        notifier: Optional[NotificationSink] = None,
        db_path: Optional[Path] = None,
    ):
        """
        Initialize application context.

        Args:
            settings: Settings to use; defaults to the process settings.
            repository: Storage backend; defaults to SQLite from settings.
            price_feed: Quote source; defaults to the stub feed.
            notifier: Notification sink; defaults from settings.
            db_path: Optional SQLite file overriding the settings URL.
        """
        self.settings = settings or get_settings()
        self._engine: Optional[Engine] = None
        self._session: Optional[Session] = None

        if repository is None:
            self._engine, self._session = open_session(self.settings.get_database_url(), db_path)
            repository = SqlAlchemyKeyValueRepository(self._session)
        self.repository = repository

        self.store = DomainStore()
        self.market_data = MarketDataService(
            provider=price_feed or StubPriceFeed(seed=self.settings.stub_feed_seed),
            cache_ttl_seconds=self.settings.market_data_cache_ttl_seconds,
        )
        self.notifier = notifier or build_notifier(self.settings)
        self.persistence = PersistenceService(
            store=self.store,
            repository=self.repository,
            backup_retention_days=self.settings.backup_retention_days,
        )
        self.tracker = StockTracker(
            store=self.store,
            persistence=self.persistence,
            market_data_service=self.market_data,
        )
        self.analysis = AnalysisService(
            store=self.store,
            market_data_service=self.market_data,
        )
        self.scheduler = AlertScheduler(
            store=self.store,
            market_data=self.market_data,
            persistence=self.persistence,
            notifier=self.notifier,
            interval_seconds=self.settings.alert_check_interval_seconds,
            threshold_percent=self.settings.alert_threshold_percent,
        )
        self._closed = False

    def load(self) -> dict[str, int]:
        """Load persisted state into the store."""
        return self.persistence.load_into_store()

    def start(self) -> None:
        """Load state and start alert monitoring when enabled (needs a running loop)."""
        self.load()
        if self.settings.alert_scheduler_enabled:
            self.scheduler.start()

    async def aclose(self) -> None:
        """Stop the scheduler before releasing the store's resources."""
        if self._closed:
            return
        self.scheduler.shutdown()
        compacted = await self.persistence.compact_async()
        if not compacted.ok:
            logger.warning("Compaction on shutdown incomplete: %s", compacted.error)
        close = getattr(self.notifier, "aclose", None)
        if close is not None:
            await close()
        self.close()

    def close(self) -> None:
        """Release database resources."""
        self.scheduler.shutdown()
        self.persistence.close()
        if self._session:
            self._session.close()
            self._session = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
        self._closed = True
