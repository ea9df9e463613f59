"""View models for alert scheduler ticks."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class TickReport:
    """What one scheduler tick evaluated, triggered and failed on."""

    started_at: datetime
    finished_at: Optional[datetime] = None
    evaluated: int = 0
    triggered: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)
    persisted: bool = True
    persist_error: Optional[str] = None
