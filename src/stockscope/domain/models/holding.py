"""Holding domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Holding:
    """
    A recorded position in one symbol.

    Shares and average price are always positive; the DomainStore
    validates both before a Holding is created or edited.
    """

    holding_id: str
    symbol: str
    shares: Decimal
    avg_price: Decimal
    date_added: Optional[datetime] = field(default=None)

    @property
    def cost_basis(self) -> Decimal:
        """Total amount paid for the position."""
        return self.shares * self.avg_price
