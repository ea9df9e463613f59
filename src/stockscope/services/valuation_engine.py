"""Valuation engine: pure portfolio and alert metrics from quotes."""

from decimal import Decimal
from typing import Callable, Mapping, Optional, Sequence

from stockscope.domain.models import Alert, Holding
from stockscope.domain.views import ComparisonView, HoldingValuation, Quote

ZERO = Decimal("0")
HUNDRED = Decimal("100")
DEFAULT_ALERT_THRESHOLD = Decimal("2.0")


def current_value(holding: Holding, quote: Quote) -> Decimal:
    """Formula: shares × price."""
    return holding.shares * quote.price


def gain_loss(holding: Holding, quote: Quote) -> Decimal:
    """Formula: (price - avg_price) × shares."""
    return (quote.price - holding.avg_price) * holding.shares


def gain_loss_percent(holding: Holding, quote: Quote) -> Decimal:
    """
    Formula: (price - avg_price) / avg_price × 100.

    A zero average price cannot occur for a validated holding; it is
    reported as a 0% change rather than dividing by zero.
    """
    if holding.avg_price == ZERO:
        return ZERO
    return (quote.price - holding.avg_price) / holding.avg_price * HUNDRED


def value_holding(holding: Holding, quote: Optional[Quote]) -> HoldingValuation:
    """Valuation for one holding; unpriced when quote is None."""
    if quote is None:
        return HoldingValuation(holding=holding)
    return HoldingValuation(
        holding=holding,
        current_price=quote.price,
        current_value=current_value(holding, quote),
        gain_loss=gain_loss(holding, quote),
        gain_loss_percent=gain_loss_percent(holding, quote),
    )


def portfolio_total(holdings: Sequence[Holding], quotes: Mapping[str, Quote]) -> Decimal:
    """
    Sum of current values, accumulated in holding order.

    Holdings without a quote contribute nothing.
    """
    total = ZERO
    for holding in holdings:
        quote = quotes.get(holding.symbol)
        if quote is not None:
            total += current_value(holding, quote)
    return total


def percent_from_target(alert: Alert, quote: Quote) -> Decimal:
    """Formula: |price - target| / target × 100 (direction-agnostic)."""
    if alert.target_price == ZERO:
        return Decimal("Infinity")
    return abs(quote.price - alert.target_price) / alert.target_price * HUNDRED


def is_within_threshold(
    alert: Alert,
    quote: Quote,
    threshold_percent: Decimal = DEFAULT_ALERT_THRESHOLD,
) -> bool:
    """True when the price is within threshold_percent of target (inclusive)."""
    return percent_from_target(alert, quote) <= Decimal(str(threshold_percent))


# Two-symbol comparison. On an exact tie the left-hand symbol wins.


def _winner(left: Quote, right: Quote, metric: Callable[[Quote], object]) -> str:
    return right.symbol if metric(right) > metric(left) else left.symbol


def winner_by_price(left: Quote, right: Quote) -> str:
    return _winner(left, right, lambda q: q.price)


def winner_by_change_percent(left: Quote, right: Quote) -> str:
    return _winner(left, right, lambda q: q.change_percent)


def winner_by_volume(left: Quote, right: Quote) -> str:
    return _winner(left, right, lambda q: q.volume)


def winner_by_market_cap(left: Quote, right: Quote) -> str:
    return _winner(left, right, lambda q: q.market_cap)


def compare(left: Quote, right: Quote) -> ComparisonView:
    """Compare two quotes metric by metric."""
    return ComparisonView(
        left=left,
        right=right,
        price_winner=winner_by_price(left, right),
        change_percent_winner=winner_by_change_percent(left, right),
        volume_winner=winner_by_volume(left, right),
        market_cap_winner=winner_by_market_cap(left, right),
    )
