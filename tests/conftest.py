"""
Pytest configuration and fixtures for StockScope tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic, float-valued, failing and gated price feeds
- Recording notification sinks
- Key-value repositories whose writes can be made to fail or stall
- Service and API client fixtures
- Time helpers for Eastern timezone
"""

import asyncio
import threading
from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from stockscope.app_context import AppContext
from stockscope.config.settings import Settings, reset_settings
from stockscope.core.exceptions import FeedUnavailableError, PersistenceError
from stockscope.core.timezone import EASTERN_TZ
from stockscope.domain.views import Quote
from stockscope.main import create_app
from stockscope.repositories.sqlalchemy import SqlAlchemyKeyValueRepository
from stockscope.repositories.sqlalchemy.database import (
    create_db_engine,
    create_session_factory,
    init_db,
)
from stockscope.services import (
    AlertScheduler,
    AnalysisService,
    DomainStore,
    MarketDataService,
    PersistenceService,
    StockTracker,
)


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return eastern_datetime(2024, 6, 15, 14, 30, 0)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    session = create_session_factory(test_engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def kv_repo(test_session) -> SqlAlchemyKeyValueRepository:
    """Provide test KeyValueRepository."""
    return SqlAlchemyKeyValueRepository(test_session)


class FlakyKeyValueRepository:
    """Key-value repository whose reads or writes can be switched to fail."""

    def __init__(self, inner):
        self._inner = inner
        self.fail_writes = False
        self.fail_reads = False

    def get(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise PersistenceError(f"Failed to read '{key}': disk unavailable")
        return self._inner.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise PersistenceError(f"Failed to write '{key}': quota exceeded")
        self._inner.set(key, value)

    def delete(self, key: str) -> bool:
        if self.fail_writes:
            raise PersistenceError(f"Failed to delete '{key}': quota exceeded")
        return self._inner.delete(key)

    def keys(self) -> list[str]:
        return self._inner.keys()

    def items(self) -> dict[str, str]:
        return self._inner.items()


@pytest.fixture
def flaky_repo(kv_repo) -> FlakyKeyValueRepository:
    """Provide a repository that can be told to fail."""
    return FlakyKeyValueRepository(kv_repo)


class StalledKeyValueRepository(FlakyKeyValueRepository):
    """
    Repository whose writes block the calling thread until released.

    Stands in for a slow or locked SQLite file.
    """

    def __init__(self, inner):
        super().__init__(inner)
        self.write_started = threading.Event()
        self.release = threading.Event()

    def set(self, key: str, value: str) -> None:
        self.write_started.set()
        if not self.release.wait(timeout=5):
            raise PersistenceError(f"Failed to write '{key}': timed out")
        super().set(key, value)


@pytest.fixture
def stalled_repo(kv_repo) -> StalledKeyValueRepository:
    """Provide a repository whose writes wait for release."""
    repo = StalledKeyValueRepository(kv_repo)
    yield repo
    repo.release.set()


# =============================================================================
# PRICE FEED FIXTURES
# =============================================================================


class DeterministicPriceFeed:
    """
    Price feed returning fixed quotes with no randomness.

    Prices can be changed between calls; unknown or unavailable symbols
    raise FeedUnavailableError.
    """

    FIXED_QUOTES = {
        # symbol: (price, change_percent, volume, market_cap)
        "AAPL": (Decimal("185.50"), Decimal("0.68"), 50_000_000, 2_900_000_000_000),
        "MSFT": (Decimal("378.25"), Decimal("0.38"), 20_000_000, 2_800_000_000_000),
        "GOOGL": (Decimal("142.75"), Decimal("0.88"), 30_000_000, 1_800_000_000_000),
        "TSLA": (Decimal("248.75"), Decimal("-0.54"), 90_000_000, 790_000_000_000),
    }

    def __init__(self, as_of: Optional[datetime] = None):
        self._as_of = as_of or eastern_datetime(2024, 6, 15, 16, 0, 0)
        self._quotes = dict(self.FIXED_QUOTES)
        self.unavailable: set[str] = set()
        self.calls: list[str] = []

    def set_price(self, symbol: str, price) -> None:
        _, change_percent, volume, market_cap = self._quotes.get(
            symbol, (None, Decimal("0"), 1_000_000, 1_000_000_000)
        )
        self._quotes[symbol] = (Decimal(str(price)), change_percent, volume, market_cap)

    async def get_quote(self, symbol: str) -> Quote:
        self.calls.append(symbol)
        if symbol in self.unavailable or symbol not in self._quotes:
            raise FeedUnavailableError(symbol, "no quote")
        price, change_percent, volume, market_cap = self._quotes[symbol]
        return Quote(
            symbol=symbol,
            price=price,
            change=(price * change_percent / 100).quantize(Decimal("0.01")),
            change_percent=change_percent,
            volume=volume,
            market_cap=market_cap,
            as_of=self._as_of,
            name=f"{symbol} Inc",
        )


class FloatPriceFeed(DeterministicPriceFeed):
    """Deterministic feed reporting prices as plain floats."""

    async def get_quote(self, symbol: str) -> Quote:
        quote = await super().get_quote(symbol)
        quote.price = float(quote.price)
        quote.change = float(quote.change)
        quote.change_percent = float(quote.change_percent)
        return quote


class BrokenPriceFeed:
    """Price feed that fails with a non-application exception."""

    async def get_quote(self, symbol: str) -> Quote:
        raise ConnectionError("Network unavailable")


class GatedPriceFeed(DeterministicPriceFeed):
    """
    Deterministic feed that blocks inside get_quote until released.

    Records how many calls were in flight at once.
    """

    def __init__(self):
        super().__init__()
        self.entered = asyncio.Event()
        self.release = asyncio.Event()
        self.in_flight = 0
        self.max_in_flight = 0

    async def get_quote(self, symbol: str) -> Quote:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        self.entered.set()
        try:
            await self.release.wait()
            return await super().get_quote(symbol)
        finally:
            self.in_flight -= 1


@pytest.fixture
def price_feed(fixed_now) -> DeterministicPriceFeed:
    """Provide deterministic price feed."""
    return DeterministicPriceFeed(as_of=fixed_now)


@pytest.fixture
def float_feed(fixed_now) -> FloatPriceFeed:
    """Provide a feed whose quotes carry float prices."""
    return FloatPriceFeed(as_of=fixed_now)


@pytest.fixture
def broken_feed() -> BrokenPriceFeed:
    """Provide a price feed that always raises."""
    return BrokenPriceFeed()


@pytest.fixture
def gated_feed() -> GatedPriceFeed:
    """Provide a price feed that blocks until released."""
    return GatedPriceFeed()


# =============================================================================
# NOTIFICATION FIXTURES
# =============================================================================


class RecordingNotificationSink:
    """Sink that keeps every notification it receives."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    async def notify(self, title: str, body: str) -> None:
        self.messages.append((title, body))


class ExplodingNotificationSink:
    """Sink whose delivery always fails."""

    async def notify(self, title: str, body: str) -> None:
        raise RuntimeError("notification service down")


@pytest.fixture
def notifier() -> RecordingNotificationSink:
    """Provide a recording notification sink."""
    return RecordingNotificationSink()


@pytest.fixture
def exploding_notifier() -> ExplodingNotificationSink:
    """Provide a notification sink that raises."""
    return ExplodingNotificationSink()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def store() -> DomainStore:
    """Provide an empty DomainStore."""
    return DomainStore()


@pytest.fixture
def market_data_service(price_feed) -> MarketDataService:
    """Provide MarketDataService over the deterministic feed."""
    return MarketDataService(provider=price_feed, cache_ttl_seconds=60)


@pytest.fixture
def persistence(store, kv_repo) -> PersistenceService:
    """Provide PersistenceService over in-memory SQLite."""
    service = PersistenceService(store=store, repository=kv_repo)
    yield service
    service.close()


@pytest.fixture
def flaky_persistence(store, flaky_repo) -> PersistenceService:
    """Provide PersistenceService whose storage can be made to fail."""
    service = PersistenceService(store=store, repository=flaky_repo)
    yield service
    service.close()


@pytest.fixture
def tracker(store, persistence, market_data_service) -> StockTracker:
    """Provide StockTracker instance."""
    return StockTracker(
        store=store,
        persistence=persistence,
        market_data_service=market_data_service,
    )


@pytest.fixture
def analysis_service(store, market_data_service) -> AnalysisService:
    """Provide AnalysisService instance."""
    return AnalysisService(store=store, market_data_service=market_data_service)


@pytest.fixture
def alert_scheduler(store, market_data_service, persistence, notifier) -> AlertScheduler:
    """Provide AlertScheduler with the default 2% threshold."""
    return AlertScheduler(
        store=store,
        market_data=market_data_service,
        persistence=persistence,
        notifier=notifier,
        interval_seconds=60,
    )


# =============================================================================
# API FIXTURES
# =============================================================================


@pytest.fixture
def api_context(kv_repo, price_feed, notifier) -> AppContext:
    """AppContext on in-memory storage with the scheduler disabled."""
    settings = Settings(
        database_url="sqlite://",
        alert_scheduler_enabled=False,
        market_data_cache_ttl_seconds=0,
    )
    return AppContext(
        settings=settings,
        repository=kv_repo,
        price_feed=price_feed,
        notifier=notifier,
    )


@pytest.fixture
def client(api_context) -> TestClient:
    """Create test client running the app lifespan around api_context."""
    app = create_app(context_factory=lambda: api_context)
    with TestClient(app) as test_client:
        yield test_client
