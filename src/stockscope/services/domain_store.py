"""In-memory store for portfolio, alerts and watchlist."""

import logging
import uuid
from datetime import datetime
from typing import Any, Optional

from stockscope.core.exceptions import NotFoundError
from stockscope.core.timezone import now_eastern
from stockscope.core.validation import normalize_symbol, parse_positive_decimal
from stockscope.domain.models import Alert, Holding, WatchlistItem
from stockscope.domain.views import WatchlistAddition

logger = logging.getLogger(__name__)


class DomainStore:
    """
    Owner of the Portfolio, Alerts and Watchlist collections.

    The store is the single writer of its collections: every mutation goes
    through one of its methods, and queries hand out copies of the lists.
    Entities are addressed by generated ids, never by list position.
    Invalid input and unknown ids raise before anything is changed.
    """

    def __init__(self) -> None:
        self._holdings: list[Holding] = []
        self._alerts: list[Alert] = []
        self._watchlist: list[WatchlistItem] = []

    # Queries

    @property
    def holdings(self) -> list[Holding]:
        return list(self._holdings)

    @property
    def alerts(self) -> list[Alert]:
        return list(self._alerts)

    @property
    def pending_alerts(self) -> list[Alert]:
        return [a for a in self._alerts if not a.triggered]

    @property
    def triggered_alerts(self) -> list[Alert]:
        return [a for a in self._alerts if a.triggered]

    @property
    def watchlist(self) -> list[WatchlistItem]:
        return list(self._watchlist)

    def get_holding(self, holding_id: str) -> Holding:
        for holding in self._holdings:
            if holding.holding_id == holding_id:
                return holding
        raise NotFoundError("Holding", holding_id)

    def get_alert(self, alert_id: str) -> Alert:
        for alert in self._alerts:
            if alert.alert_id == alert_id:
                return alert
        raise NotFoundError("Alert", alert_id)

    def find_watchlist_item(self, symbol: str) -> Optional[WatchlistItem]:
        normalized = normalize_symbol(symbol)
        for item in self._watchlist:
            if item.symbol == normalized:
                return item
        return None

    # Portfolio

    def add_holding(self, symbol: str, shares: Any, avg_price: Any) -> Holding:
        """Append a new holding."""
        holding = Holding(
            holding_id=str(uuid.uuid4()),
            symbol=normalize_symbol(symbol),
            shares=parse_positive_decimal(shares, "shares"),
            avg_price=parse_positive_decimal(avg_price, "avg_price"),
            date_added=now_eastern(),
        )
        self._holdings.append(holding)
        logger.debug("Added holding %s %s @ %s", holding.symbol, holding.shares, holding.avg_price)
        return holding

    def edit_holding(self, holding_id: str, shares: Any, avg_price: Any) -> Holding:
        """Update shares and average price in place."""
        holding = self.get_holding(holding_id)
        new_shares = parse_positive_decimal(shares, "shares")
        new_avg_price = parse_positive_decimal(avg_price, "avg_price")
        holding.shares = new_shares
        holding.avg_price = new_avg_price
        return holding

    def remove_holding(self, holding_id: str) -> Holding:
        holding = self.get_holding(holding_id)
        self._holdings.remove(holding)
        return holding

    # Alerts

    def add_alert(self, symbol: str, target_price: Any) -> Alert:
        """Append a pending alert."""
        alert = Alert(
            alert_id=str(uuid.uuid4()),
            symbol=normalize_symbol(symbol),
            target_price=parse_positive_decimal(target_price, "target_price"),
            date_created=now_eastern(),
        )
        self._alerts.append(alert)
        return alert

    def remove_alert(self, alert_id: str) -> Alert:
        alert = self.get_alert(alert_id)
        self._alerts.remove(alert)
        return alert

    def clear_triggered_alerts(self) -> list[Alert]:
        """Remove every triggered alert and return them; pending alerts are kept."""
        cleared = [a for a in self._alerts if a.triggered]
        if cleared:
            self._alerts = [a for a in self._alerts if not a.triggered]
        return cleared

    def mark_alert_triggered(self, alert_id: str, when: Optional[datetime] = None) -> Alert:
        """
        Transition an alert to Triggered.

        Already-triggered alerts are returned unchanged (never re-armed).
        """
        alert = self.get_alert(alert_id)
        alert.mark_triggered(when or now_eastern())
        return alert

    # Watchlist

    def add_watchlist_item(self, symbol: str) -> WatchlistAddition:
        """Add a symbol unless it is already watched."""
        normalized = normalize_symbol(symbol)
        existing = self.find_watchlist_item(normalized)
        if existing:
            logger.info("%s is already in the watchlist", normalized)
            return WatchlistAddition(item=existing, added=False)

        item = WatchlistItem(
            item_id=str(uuid.uuid4()),
            symbol=normalized,
            date_added=now_eastern(),
        )
        self._watchlist.append(item)
        return WatchlistAddition(item=item, added=True)

    def remove_watchlist_item(self, item_id: str) -> WatchlistItem:
        for item in self._watchlist:
            if item.item_id == item_id:
                self._watchlist.remove(item)
                return item
        raise NotFoundError("WatchlistItem", item_id)

    # Bulk replacement (load and import)

    def replace_portfolio(self, holdings: list[Holding]) -> None:
        self._holdings = list(holdings)

    def replace_alerts(self, alerts: list[Alert]) -> None:
        self._alerts = list(alerts)

    def replace_watchlist(self, items: list[WatchlistItem]) -> None:
        self._watchlist = list(items)
