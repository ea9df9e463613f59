"""Recurring price-alert evaluation."""

import asyncio
import logging
from decimal import Decimal
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from stockscope.core.exceptions import FeedUnavailableError, InvalidInputError, NotFoundError
from stockscope.core.timezone import EASTERN_TZ, now_eastern
from stockscope.domain.models import Alert, SnapshotKind
from stockscope.domain.views import Quote, TickReport
from stockscope.notifications.base import NotificationSink
from stockscope.services.domain_store import DomainStore
from stockscope.services.market_data_service import MarketDataService
from stockscope.services.persistence_service import PersistenceService
from stockscope.services import valuation_engine

logger = logging.getLogger(__name__)

ALERT_JOB_ID = "alert_check"


def format_alert_message(alert: Alert, quote: Quote) -> tuple[str, str]:
    """Notification title and body for a triggered alert."""
    title = f"Price Alert: {alert.symbol}"
    body = (
        f"{alert.symbol} is trading at ${quote.price:.2f}, "
        f"close to your target of ${alert.target_price:.2f}"
    )
    return title, body


class AlertScheduler:
    """
    Periodic evaluator for pending price alerts.

    Each tick fetches a fresh quote per pending alert and triggers the
    alert when the price is within the threshold of its target, in either
    direction. Ticks never overlap: the interval job runs with
    max_instances=1 and coalescing, and run_tick itself holds a lock, so a
    tick requested while another is in flight waits for it to finish.
    """

    def __init__(
        self,
        store: DomainStore,
        market_data: MarketDataService,
        persistence: PersistenceService,
        notifier: NotificationSink,
        interval_seconds: int = 60,
        threshold_percent: float = 2.0,
    ):
        self._store = store
        self._market = market_data
        self._persistence = persistence
        self._notifier = notifier
        self._interval = interval_seconds
        self._threshold = Decimal(str(threshold_percent))
        self._lock = asyncio.Lock()
        self._scheduler: Optional[AsyncIOScheduler] = None
        self.last_report: Optional[TickReport] = None

    @property
    def is_running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    @property
    def is_tick_in_progress(self) -> bool:
        return self._lock.locked()

    def start(self) -> None:
        """Register the recurring job. Must be called from a running event loop."""
        if self.is_running:
            return
        if self._interval <= 0:
            raise InvalidInputError("alert check interval must be positive")

        scheduler = AsyncIOScheduler(timezone=EASTERN_TZ)
        scheduler.add_job(
            self.run_tick,
            trigger=IntervalTrigger(seconds=self._interval),
            id=ALERT_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info("Alert scheduler started (every %ss)", self._interval)

    def shutdown(self) -> None:
        """Cancel the recurring job; safe to call more than once."""
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Alert scheduler shut down")

    async def run_tick(self) -> TickReport:
        """Evaluate every pending alert once."""
        async with self._lock:
            report = TickReport(started_at=now_eastern())
            try:
                await self._evaluate(report)
            finally:
                report.finished_at = now_eastern()
                self.last_report = report
            if report.triggered or report.failures:
                logger.info(
                    "Alert tick: evaluated=%d triggered=%d failures=%d",
                    report.evaluated,
                    len(report.triggered),
                    len(report.failures),
                )
            return report

    async def _evaluate(self, report: TickReport) -> None:
        for alert in self._store.pending_alerts:
            try:
                quote = await self._market.get_quote(alert.symbol, use_cache=False)
            except FeedUnavailableError as e:
                logger.warning("Skipping alert %s: %s", alert.alert_id, e.message)
                report.failures[alert.symbol] = e.message
                continue

            try:
                within = valuation_engine.is_within_threshold(alert, quote, self._threshold)
            except Exception as e:
                logger.exception("Evaluating alert %s failed", alert.alert_id)
                report.failures[alert.symbol] = f"evaluation failed: {e}"
                continue

            report.evaluated += 1
            if not within:
                continue

            try:
                current = self._store.get_alert(alert.alert_id)
            except NotFoundError:
                logger.info("Alert %s was removed during the tick", alert.alert_id)
                continue
            if current.triggered:
                continue

            self._store.mark_alert_triggered(alert.alert_id, now_eastern())
            report.triggered.append(alert.alert_id)

            saved = await self._persistence.save_async(SnapshotKind.ALERTS)
            if not saved.ok:
                report.persisted = False
                report.persist_error = saved.error

            title, body = format_alert_message(current, quote)
            await self._dispatch(title, body)

    async def _dispatch(self, title: str, body: str) -> None:
        try:
            await self._notifier.notify(title, body)
        except Exception:
            logger.exception("Notification '%s' could not be delivered", title)
