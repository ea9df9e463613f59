"""Pydantic schemas for alert endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from stockscope.domain.models import Alert, AlertStatus
from stockscope.domain.views import AlertView, MutationResult, TickReport


class AlertCreateRequest(BaseModel):
    """Request schema for creating an alert."""

    symbol: str
    target_price: Decimal


class AlertResponse(BaseModel):
    """Response schema for an alert."""

    alert_id: str
    symbol: str
    target_price: Decimal
    status: AlertStatus
    triggered: bool
    date_created: Optional[datetime] = None
    trigger_date: Optional[datetime] = None
    current_price: Optional[Decimal] = None
    percent_from_target: Optional[Decimal] = None

    @classmethod
    def from_domain(cls, alert: Alert) -> "AlertResponse":
        return cls(
            alert_id=alert.alert_id,
            symbol=alert.symbol,
            target_price=alert.target_price,
            status=alert.status,
            triggered=alert.triggered,
            date_created=alert.date_created,
            trigger_date=alert.trigger_date,
        )

    @classmethod
    def from_view(cls, view: AlertView) -> "AlertResponse":
        response = cls.from_domain(view.alert)
        response.current_price = view.current_price
        response.percent_from_target = view.percent_from_target
        return response


class AlertListResponse(BaseModel):
    """Response schema for the alert listing."""

    alerts: list[AlertResponse]
    pending_count: int
    triggered_count: int


class AlertMutationResponse(BaseModel):
    """A changed alert plus the persistence outcome."""

    alert: AlertResponse
    saved: bool
    save_error: Optional[str] = None

    @classmethod
    def from_result(cls, result: MutationResult) -> "AlertMutationResponse":
        return cls(
            alert=AlertResponse.from_domain(result.value),
            saved=result.saved.ok,
            save_error=result.saved.error,
        )


class ClearTriggeredResponse(BaseModel):
    """Response schema for clearing triggered alerts."""

    cleared: list[AlertResponse]
    saved: bool
    save_error: Optional[str] = None


class TickReportResponse(BaseModel):
    """Response schema for a manual alert check."""

    started_at: datetime
    finished_at: Optional[datetime] = None
    evaluated: int
    triggered: list[str]
    failures: dict[str, str]
    persisted: bool
    persist_error: Optional[str] = None

    @classmethod
    def from_report(cls, report: TickReport) -> "TickReportResponse":
        return cls(
            started_at=report.started_at,
            finished_at=report.finished_at,
            evaluated=report.evaluated,
            triggered=report.triggered,
            failures=report.failures,
            persisted=report.persisted,
            persist_error=report.persist_error,
        )
