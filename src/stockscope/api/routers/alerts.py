"""Price alert API router."""

from fastapi import APIRouter, Depends

from stockscope.api.deps import get_alert_scheduler, get_analysis_service, get_tracker
from stockscope.api.schemas.alerts import (
    AlertCreateRequest,
    AlertListResponse,
    AlertMutationResponse,
    AlertResponse,
    ClearTriggeredResponse,
    TickReportResponse,
)
from stockscope.services import AlertScheduler, AnalysisService, StockTracker

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=AlertListResponse)
async def list_alerts(
    analysis: AnalysisService = Depends(get_analysis_service),
):
    """All alerts; pending ones carry their distance from target."""
    views = await analysis.alerts_view()
    alerts = [AlertResponse.from_view(v) for v in views]
    triggered = sum(1 for a in alerts if a.triggered)
    return AlertListResponse(
        alerts=alerts,
        pending_count=len(alerts) - triggered,
        triggered_count=triggered,
    )


@router.post("", response_model=AlertMutationResponse, status_code=201)
async def create_alert(
    data: AlertCreateRequest,
    tracker: StockTracker = Depends(get_tracker),
):
    """Create a pending alert."""
    result = await tracker.add_alert(data.symbol, data.target_price)
    return AlertMutationResponse.from_result(result)


@router.post("/clear-triggered", response_model=ClearTriggeredResponse)
async def clear_triggered(
    tracker: StockTracker = Depends(get_tracker),
):
    """Remove every triggered alert."""
    result = await tracker.clear_triggered_alerts()
    return ClearTriggeredResponse(
        cleared=[AlertResponse.from_domain(a) for a in result.value],
        saved=result.saved.ok,
        save_error=result.saved.error,
    )


@router.post("/check", response_model=TickReportResponse)
async def check_alerts(
    scheduler: AlertScheduler = Depends(get_alert_scheduler),
):
    """Run one alert evaluation now (waits for an in-flight tick)."""
    report = await scheduler.run_tick()
    return TickReportResponse.from_report(report)


@router.delete("/{alert_id}", response_model=AlertMutationResponse)
async def remove_alert(
    alert_id: str,
    tracker: StockTracker = Depends(get_tracker),
):
    """Remove an alert."""
    result = await tracker.remove_alert(alert_id)
    return AlertMutationResponse.from_result(result)
