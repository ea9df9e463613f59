"""
Unit tests for DomainStore.

Tests cover:
- Adding, editing and removing holdings
- Input validation (symbol, shares, price)
- Alert lifecycle (pending, triggered, cleared)
- Watchlist uniqueness
- Id-based addressing
"""

from decimal import Decimal

import pytest

from stockscope.core.exceptions import InvalidInputError, NotFoundError
from stockscope.domain.models import AlertStatus
from stockscope.services import DomainStore


# =============================================================================
# HOLDING TESTS
# =============================================================================


class TestHoldings:
    """Tests for portfolio mutations."""

    def test_add_holding_normalizes_symbol(self, store: DomainStore):
        """
        GIVEN an empty store
        WHEN I add a holding for "  aapl "
        THEN it is stored as AAPL with Decimal shares and price
        """
        holding = store.add_holding("  aapl ", "10", "150.00")

        assert holding.symbol == "AAPL"
        assert holding.shares == Decimal("10")
        assert holding.avg_price == Decimal("150.00")
        assert holding.holding_id
        assert holding.date_added is not None
        assert store.holdings == [holding]

    def test_add_holding_keeps_insertion_order(self, store: DomainStore):
        """
        GIVEN several holdings added in turn
        WHEN I list holdings
        THEN they come back in insertion order with distinct ids
        """
        first = store.add_holding("AAPL", 10, 150)
        second = store.add_holding("MSFT", 5, 300)
        third = store.add_holding("AAPL", 2, 170)

        assert [h.holding_id for h in store.holdings] == [
            first.holding_id,
            second.holding_id,
            third.holding_id,
        ]
        assert len({h.holding_id for h in store.holdings}) == 3

    @pytest.mark.parametrize(
        "symbol,shares,price",
        [
            ("", 10, 150),
            ("   ", 10, 150),
            ("AAPL", 0, 150),
            ("AAPL", -1, 150),
            ("AAPL", 10, 0),
            ("AAPL", "abc", 150),
            ("AAPL", 10, "NaN"),
            ("AAPL", None, 150),
            ("AAPL", True, 150),
        ],
    )
    def test_add_holding_rejects_invalid_input(self, store: DomainStore, symbol, shares, price):
        """
        GIVEN an empty store
        WHEN I add a holding with an invalid field
        THEN InvalidInputError is raised and nothing is stored
        """
        with pytest.raises(InvalidInputError):
            store.add_holding(symbol, shares, price)

        assert store.holdings == []

    def test_edit_holding_updates_in_place(self, store: DomainStore):
        """
        GIVEN a holding
        WHEN I edit its shares and price
        THEN the same id carries the new values
        """
        holding = store.add_holding("AAPL", 10, 150)

        edited = store.edit_holding(holding.holding_id, 12, "155.5")

        assert edited.holding_id == holding.holding_id
        assert store.holdings[0].shares == Decimal("12")
        assert store.holdings[0].avg_price == Decimal("155.5")

    def test_edit_holding_invalid_input_leaves_holding_unchanged(self, store: DomainStore):
        """
        GIVEN a holding
        WHEN I edit it with a valid share count but a negative price
        THEN InvalidInputError is raised and neither field changes
        """
        holding = store.add_holding("AAPL", 10, 150)

        with pytest.raises(InvalidInputError):
            store.edit_holding(holding.holding_id, 20, -5)

        assert store.holdings[0].shares == Decimal("10")
        assert store.holdings[0].avg_price == Decimal("150")

    def test_edit_unknown_holding_raises_not_found(self, store: DomainStore):
        """
        GIVEN an empty store
        WHEN I edit an unknown id
        THEN NotFoundError is raised
        """
        with pytest.raises(NotFoundError):
            store.edit_holding("missing", 1, 1)

    def test_remove_holding_by_id(self, store: DomainStore):
        """
        GIVEN two holdings in the same symbol
        WHEN I remove one by id
        THEN only that holding is gone
        """
        first = store.add_holding("AAPL", 10, 150)
        second = store.add_holding("AAPL", 5, 160)

        removed = store.remove_holding(first.holding_id)

        assert removed.holding_id == first.holding_id
        assert [h.holding_id for h in store.holdings] == [second.holding_id]

    def test_remove_unknown_holding_raises_not_found(self, store: DomainStore):
        with pytest.raises(NotFoundError):
            store.remove_holding("missing")

    def test_holdings_returns_copy(self, store: DomainStore):
        """
        GIVEN a holding
        WHEN the caller clears the returned list
        THEN the store still has the holding
        """
        store.add_holding("AAPL", 10, 150)

        store.holdings.clear()

        assert len(store.holdings) == 1


# =============================================================================
# ALERT TESTS
# =============================================================================


class TestAlerts:
    """Tests for alert mutations and lifecycle."""

    def test_add_alert_is_pending(self, store: DomainStore):
        """
        GIVEN an empty store
        WHEN I add an alert
        THEN it is pending with no trigger date
        """
        alert = store.add_alert("tsla", "250")

        assert alert.symbol == "TSLA"
        assert alert.target_price == Decimal("250")
        assert alert.status == AlertStatus.PENDING
        assert alert.triggered is False
        assert alert.trigger_date is None
        assert store.pending_alerts == [alert]

    def test_add_alert_rejects_non_positive_target(self, store: DomainStore):
        with pytest.raises(InvalidInputError):
            store.add_alert("TSLA", 0)
        assert store.alerts == []

    def test_mark_alert_triggered_sets_date(self, store: DomainStore, fixed_now):
        """
        GIVEN a pending alert
        WHEN it is marked triggered
        THEN triggered is True and trigger_date is set
        """
        alert = store.add_alert("TSLA", 250)

        store.mark_alert_triggered(alert.alert_id, fixed_now)

        stored = store.get_alert(alert.alert_id)
        assert stored.triggered is True
        assert stored.status == AlertStatus.TRIGGERED
        assert stored.trigger_date == fixed_now
        assert store.pending_alerts == []
        assert store.triggered_alerts == [stored]

    def test_mark_triggered_twice_keeps_first_date(self, store: DomainStore, fixed_now):
        """
        GIVEN a triggered alert
        WHEN it is marked triggered again later
        THEN the original trigger date is kept
        """
        alert = store.add_alert("TSLA", 250)
        store.mark_alert_triggered(alert.alert_id, fixed_now)

        store.mark_alert_triggered(alert.alert_id)

        assert store.get_alert(alert.alert_id).trigger_date == fixed_now

    def test_clear_triggered_keeps_pending(self, store: DomainStore, fixed_now):
        """
        GIVEN one pending and two triggered alerts
        WHEN I clear triggered alerts
        THEN the two triggered ones are returned and only the pending one remains
        """
        pending = store.add_alert("AAPL", 200)
        done_a = store.add_alert("TSLA", 250)
        done_b = store.add_alert("MSFT", 380)
        store.mark_alert_triggered(done_a.alert_id, fixed_now)
        store.mark_alert_triggered(done_b.alert_id, fixed_now)

        cleared = store.clear_triggered_alerts()

        assert {a.alert_id for a in cleared} == {done_a.alert_id, done_b.alert_id}
        assert [a.alert_id for a in store.alerts] == [pending.alert_id]

    def test_clear_triggered_twice_is_idempotent(self, store: DomainStore, fixed_now):
        """
        GIVEN pending and triggered alerts that were already cleared once
        WHEN I clear triggered alerts again
        THEN nothing is returned and the pending alerts are unchanged
        """
        first = store.add_alert("AAPL", 200)
        fired = store.add_alert("TSLA", 250)
        second = store.add_alert("MSFT", 380)
        store.mark_alert_triggered(fired.alert_id, fixed_now)
        store.clear_triggered_alerts()
        remaining = [(a.alert_id, a.target_price, a.triggered) for a in store.alerts]

        assert store.clear_triggered_alerts() == []
        assert [(a.alert_id, a.target_price, a.triggered) for a in store.alerts] == remaining
        assert [a.alert_id for a in store.alerts] == [first.alert_id, second.alert_id]

    def test_clear_triggered_with_none_triggered(self, store: DomainStore):
        store.add_alert("AAPL", 200)

        assert store.clear_triggered_alerts() == []
        assert len(store.alerts) == 1

    def test_remove_alert(self, store: DomainStore):
        alert = store.add_alert("AAPL", 200)

        store.remove_alert(alert.alert_id)

        assert store.alerts == []
        with pytest.raises(NotFoundError):
            store.remove_alert(alert.alert_id)


# =============================================================================
# WATCHLIST TESTS
# =============================================================================


class TestWatchlist:
    """Tests for watchlist mutations."""

    def test_add_watchlist_item(self, store: DomainStore):
        addition = store.add_watchlist_item("nvda")

        assert addition.added is True
        assert addition.item.symbol == "NVDA"
        assert store.watchlist == [addition.item]

    def test_add_duplicate_symbol_is_noop(self, store: DomainStore):
        """
        GIVEN NVDA on the watchlist
        WHEN I add " nvda " again
        THEN nothing is added and the existing item is returned
        """
        first = store.add_watchlist_item("NVDA")

        second = store.add_watchlist_item(" nvda ")

        assert second.added is False
        assert second.item.item_id == first.item.item_id
        assert len(store.watchlist) == 1

    def test_find_watchlist_item(self, store: DomainStore):
        store.add_watchlist_item("NVDA")

        assert store.find_watchlist_item("nvda").symbol == "NVDA"
        assert store.find_watchlist_item("AAPL") is None

    def test_remove_watchlist_item(self, store: DomainStore):
        addition = store.add_watchlist_item("NVDA")

        removed = store.remove_watchlist_item(addition.item.item_id)

        assert removed.symbol == "NVDA"
        assert store.watchlist == []

    def test_remove_unknown_watchlist_item_raises(self, store: DomainStore):
        with pytest.raises(NotFoundError):
            store.remove_watchlist_item("missing")
