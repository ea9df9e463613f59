"""Price alert domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from stockscope.domain.models.enums import AlertStatus


@dataclass
class Alert:
    """
    User-defined target price for a symbol.

    Pending until the scheduler finds the price close to the target, then
    Triggered for good. trigger_date is set if and only if triggered is True.
    """

    alert_id: str
    symbol: str
    target_price: Decimal
    date_created: Optional[datetime] = field(default=None)
    triggered: bool = False
    trigger_date: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if self.triggered and self.trigger_date is None:
            raise ValueError("A triggered alert requires a trigger date")
        if not self.triggered and self.trigger_date is not None:
            raise ValueError("A pending alert cannot carry a trigger date")

    @property
    def status(self) -> AlertStatus:
        return AlertStatus.TRIGGERED if self.triggered else AlertStatus.PENDING

    @property
    def is_pending(self) -> bool:
        return not self.triggered

    def mark_triggered(self, when: datetime) -> None:
        """Move the alert to Triggered. Already-triggered alerts keep their date."""
        if self.triggered:
            return
        self.triggered = True
        self.trigger_date = when
