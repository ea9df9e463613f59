"""View models for portfolio, alert and watchlist outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from stockscope.domain.models import Alert, Holding, WatchlistItem


@dataclass
class HoldingValuation:
    """A holding enriched with its current market value."""

    holding: Holding
    current_price: Optional[Decimal] = None
    current_value: Optional[Decimal] = None
    gain_loss: Optional[Decimal] = None
    gain_loss_percent: Optional[Decimal] = None

    @property
    def is_priced(self) -> bool:
        return self.current_price is not None


@dataclass
class PortfolioView:
    """Portfolio valuation summary."""

    holdings: list[HoldingValuation] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gain_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    holding_count: int = 0
    as_of: Optional[datetime] = None


@dataclass
class AlertView:
    """An alert with its current distance to target, when priced."""

    alert: Alert
    current_price: Optional[Decimal] = None
    percent_from_target: Optional[Decimal] = None


@dataclass
class WatchlistAddition:
    """Outcome of adding a watchlist symbol (added is False when already present)."""

    item: WatchlistItem
    added: bool
